"""Tests for the dre command-line interface."""

import pytest

from dre_engine.cli.main import cli


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


@pytest.fixture
def entries_csv(tmp_path):
    path = tmp_path / "entries.csv"
    path.write_text(
        "mes,ano,tipo,valor,categoria,descricao\n"
        "3,2024,receita,1000.00,VENDAS,Vendas do mes\n"
        "3,2024,despesa,100.00,IMPOSTOS,\n"
        "3,2024,despesa,300.00,CMV,\n"
        "3,2024,despesa,100.00,DESP_ADM,Aluguel\n"
        "3,2024,receita,20.00,REC_FIN,\n"
        "2,2024,receita,500.00,VENDAS,\n",
        encoding="utf-8",
    )
    return str(path)


class TestInitChart:
    """Tests for init-chart command."""

    def test_init_chart_creates_accounts(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "init-chart", "--company", "Acme Ltda")

        assert result.exit_code == 0
        assert "Created company 'Acme Ltda'" in result.output
        assert "Successfully created 11 accounts." in result.output
        assert temp_db.get_category_by_code("VENDAS") is not None
        assert len(temp_db.list_dre_accounts()) == 11

    def test_init_chart_twice(self, cli_runner, temp_db):
        _invoke(cli_runner, temp_db, "init-chart")
        result = _invoke(cli_runner, temp_db, "init-chart")

        assert result.exit_code == 0
        assert "DRE accounts already exist" in result.output
        assert len(temp_db.list_dre_accounts()) == 11

    def test_init_chart_force_adds_nothing_new(self, cli_runner, temp_db):
        _invoke(cli_runner, temp_db, "init-chart")
        result = _invoke(cli_runner, temp_db, "init-chart", "--force")

        assert result.exit_code == 0
        assert "Successfully created 0 accounts." in result.output


class TestAccounts:
    """Tests for accounts command."""

    def test_accounts_empty(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "accounts")

        assert result.exit_code == 0
        assert "No accounts found" in result.output

    def test_accounts_shows_tree_and_strategies(self, cli_runner, temp_db):
        _invoke(cli_runner, temp_db, "init-chart")

        result = _invoke(cli_runner, temp_db, "accounts")

        assert result.exit_code == 0
        assert "DRE accounts:" in result.output
        assert "+ Receita Bruta" in result.output
        assert "  - Despesas Administrativas" in result.output
        assert "sum of 2 children" in result.output
        assert "formula conta:" in result.output

    def test_accounts_unknown_company(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "accounts", "--company", "Inexistente")

        assert result.exit_code == 1
        assert "Error: Company 'Inexistente' not found" in result.output


class TestImportEntries:
    """Tests for import-entries command."""

    def test_import_entries(self, cli_runner, temp_db, entries_csv):
        _invoke(cli_runner, temp_db, "init-chart", "--company", "Acme Ltda")

        result = _invoke(cli_runner, temp_db, "import-entries", entries_csv, "--company", "Acme Ltda")

        assert result.exit_code == 0
        assert "Import complete" in result.output
        assert "Imported: 6 entries" in result.output
        company = temp_db.get_company_by_name("Acme Ltda")
        assert len(temp_db.list_ledger_entries(company.id, 3, 2024)) == 5

    def test_import_reports_row_errors(self, cli_runner, temp_db, tmp_path):
        _invoke(cli_runner, temp_db, "init-chart", "--company", "Acme Ltda")
        csv_file = tmp_path / "bad.csv"
        csv_file.write_text("mes,ano,tipo,valor\n3,2024,receita,abc\n", encoding="utf-8")

        result = _invoke(cli_runner, temp_db, "import-entries", str(csv_file), "--company", "Acme Ltda")

        assert result.exit_code == 0
        assert "Imported: 0 entries" in result.output
        assert "Errors: 1" in result.output

    def test_import_missing_columns(self, cli_runner, temp_db, tmp_path):
        temp_db.create_company(name="Acme Ltda")
        csv_file = tmp_path / "bad.csv"
        csv_file.write_text("mes,ano\n3,2024\n", encoding="utf-8")

        result = _invoke(cli_runner, temp_db, "import-entries", str(csv_file), "--company", "Acme Ltda")

        assert result.exit_code == 1
        assert "missing required columns" in result.output


class TestReport:
    """Tests for report command."""

    @pytest.fixture
    def loaded(self, cli_runner, temp_db, entries_csv):
        _invoke(cli_runner, temp_db, "init-chart", "--company", "Acme Ltda")
        _invoke(cli_runner, temp_db, "import-entries", entries_csv, "--company", "Acme Ltda")

    def test_report_values(self, cli_runner, temp_db, loaded):
        result = _invoke(cli_runner, temp_db, "report", "Acme Ltda", "--month", "3", "--year", "2024")

        assert result.exit_code == 0
        assert "DRE - Acme Ltda - 03/2024" in result.output
        assert "12 months" in result.output
        lines = {line.split("  ")[0].strip(): line for line in result.output.splitlines()}
        assert "1,000.00" in lines["+ Receita Bruta"]
        assert "900.00" in lines["= Receita Líquida"]
        assert "600.00" in lines["= Lucro Bruto"]
        assert "-100.00" in lines["- Despesas Operacionais"]
        assert "520.00" in lines["= Resultado Líquido"]

    def test_report_trailing_total(self, cli_runner, temp_db, loaded):
        result = _invoke(cli_runner, temp_db, "report", "Acme Ltda", "--month", "3", "--year", "2024")

        revenue = next(line for line in result.output.splitlines() if "Receita Bruta" in line)
        assert revenue.split() == ["+", "Receita", "Bruta", "1,000.00", "1,500.00"]

    def test_report_all_periods(self, cli_runner, temp_db, loaded):
        result = _invoke(
            cli_runner, temp_db, "report", "Acme Ltda", "--month", "3", "--year", "2024", "--all-periods"
        )

        assert result.exit_code == 0
        assert "03/2023" in result.output
        assert "02/2024" in result.output
        assert "03/2024" in result.output

    def test_report_by_company_id(self, cli_runner, temp_db, loaded):
        company = temp_db.get_company_by_name("Acme Ltda")

        result = _invoke(cli_runner, temp_db, "report", str(company.id), "--month", "3", "--year", "2024")

        assert result.exit_code == 0
        assert "DRE - Acme Ltda - 03/2024" in result.output

    def test_report_search(self, cli_runner, temp_db, loaded):
        result = _invoke(
            cli_runner, temp_db, "report", "Acme Ltda", "--month", "3", "--year", "2024",
            "--search", "comerciais",
        )

        assert result.exit_code == 0
        assert "Despesas Operacionais" in result.output
        assert "Receita Bruta" not in result.output

    def test_report_search_without_match(self, cli_runner, temp_db, loaded):
        result = _invoke(
            cli_runner, temp_db, "report", "Acme Ltda", "--month", "3", "--year", "2024",
            "--search", "inexistente",
        )

        assert result.exit_code == 0
        assert "No accounts matching 'inexistente'." in result.output

    def test_report_without_chart(self, cli_runner, temp_db):
        temp_db.create_company(name="Acme Ltda")

        result = _invoke(cli_runner, temp_db, "report", "Acme Ltda", "--month", "3", "--year", "2024")

        assert result.exit_code == 0
        assert "No accounts configured for this company" in result.output

    def test_report_unknown_company(self, cli_runner, temp_db):
        result = _invoke(cli_runner, temp_db, "report", "Inexistente", "--month", "3", "--year", "2024")

        assert result.exit_code == 1
        assert "Error: Company 'Inexistente' not found" in result.output

    def test_report_invalid_month(self, cli_runner, temp_db):
        temp_db.create_company(name="Acme Ltda")

        result = _invoke(cli_runner, temp_db, "report", "Acme Ltda", "--month", "13")

        assert result.exit_code == 2


def test_help_does_not_need_database(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, ["--db-path", str(tmp_path / "never.db"), "--help"])

    assert result.exit_code == 0
    assert "report" in result.output
    assert not (tmp_path / "never.db").exists()
