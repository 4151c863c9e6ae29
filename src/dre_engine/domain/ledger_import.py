"""CSV import of ledger entries."""

import csv
import logging
from pathlib import Path
from typing import Any, Optional

from dre_engine.database.base import Database
from dre_engine.domain.entities import EntryKind
from dre_engine.domain.errors import (
    DataAccessError,
    NotFoundError,
    ValidationError,
    company_not_found,
)
from dre_engine.domain.periods import validate_period
from dre_engine.utils.amount_parser import parse_amount

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("mes", "ano", "tipo", "valor")

# English headers accepted as aliases of the Portuguese ones
COLUMN_ALIASES = {
    "month": "mes",
    "year": "ano",
    "kind": "tipo",
    "amount": "valor",
    "category": "categoria",
    "indicator": "indicador",
    "description": "descricao",
}


def parse_entry_kind(value: str) -> EntryKind:
    """Parse 'receita'/'despesa' (or 'inflow'/'outflow') into an EntryKind."""
    normalized = value.strip().lower()
    if normalized in ("receita", "inflow"):
        return EntryKind.INFLOW
    if normalized in ("despesa", "outflow"):
        return EntryKind.OUTFLOW
    raise ValueError(f"Unknown entry kind '{value}': expected 'receita' or 'despesa'")


class LedgerImportService:
    """Service for importing ledger entries from CSV files."""

    def __init__(self, db: Database):
        """Initialize ledger import service.

        Args:
            db: Database instance
        """
        self.db = db
        self._category_ids: dict[str, int] = {}
        self._indicator_ids: dict[str, int] = {}

    def import_csv(self, csv_file_path: str, company_id: int) -> dict[str, Any]:
        """Import ledger entries for a company from a CSV file.

        Categories and indicators are referenced by code. A row may reference
        at most one of them.

        Args:
            csv_file_path: Path to CSV file
            company_id: Company the entries belong to

        Returns:
            Dict with import statistics:
            - imported: number of entries imported
            - errors: list of row error messages

        Raises:
            NotFoundError: If the company doesn't exist
            ValidationError: If required columns are missing
            FileNotFoundError: If CSV file doesn't exist
        """
        if self.db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))

        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        imported = 0
        errors: list[str] = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(2048)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            if reader.fieldnames is None:
                raise ValidationError("CSV file has no columns")

            header_map = {
                name: COLUMN_ALIASES.get(name.strip().lower(), name.strip().lower())
                for name in reader.fieldnames
            }
            missing = [col for col in REQUIRED_COLUMNS if col not in header_map.values()]
            if missing:
                raise ValidationError(f"CSV file missing required columns: {', '.join(missing)}")

            for row_num, row in enumerate(reader, start=2):  # header is row 1
                values = {
                    header_map[key]: (value.strip() if value else None)
                    for key, value in row.items()
                    if key is not None
                }
                try:
                    self._import_row(company_id, values)
                    imported += 1
                except DataAccessError:
                    raise
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")

        logger.info(
            "ledger_import_finished",
            extra={"company_id": company_id, "imported": imported, "errors": len(errors)},
        )
        return {"imported": imported, "errors": errors}

    def _import_row(self, company_id: int, values: dict[str, Optional[str]]) -> None:
        for column in REQUIRED_COLUMNS:
            if not values.get(column):
                raise ValidationError(f"Missing {column}")

        try:
            month = int(values["mes"])
            year = int(values["ano"])
        except ValueError:
            raise ValidationError(f"Invalid period '{values['mes']}/{values['ano']}'")
        validate_period(month, year)

        kind = parse_entry_kind(values["tipo"])
        amount = parse_amount(values["valor"])
        if amount < 0:
            raise ValidationError(
                f"Negative amount '{values['valor']}': use tipo despesa for outflows"
            )

        category_code = values.get("categoria")
        indicator_code = values.get("indicador")
        if category_code and indicator_code:
            raise ValidationError("Entry cannot reference both a category and an indicator")

        self.db.create_ledger_entry(
            company_id=company_id,
            month=month,
            year=year,
            kind=kind,
            amount=amount,
            category_id=self._category_id(category_code) if category_code else None,
            indicator_id=self._indicator_id(indicator_code) if indicator_code else None,
            description=values.get("descricao"),
        )

    def _category_id(self, code: str) -> int:
        if code not in self._category_ids:
            category = self.db.get_category_by_code(code)
            if category is None:
                raise NotFoundError(f"Category '{code}' not found")
            self._category_ids[code] = category.id
        return self._category_ids[code]

    def _indicator_id(self, code: str) -> int:
        if code not in self._indicator_ids:
            indicator = self.db.get_indicator_by_code(code)
            if indicator is None:
                raise NotFoundError(f"Indicator '{code}' not found")
            self._indicator_ids[code] = indicator.id
        return self._indicator_ids[code]
