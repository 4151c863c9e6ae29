"""SQLAlchemy models for the DRE database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    CheckConstraint,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _exactly_one(*columns: str) -> str:
    flags = " + ".join(f"(CASE WHEN {col} IS NULL THEN 0 ELSE 1 END)" for col in columns)
    return f"{flags} = 1"


def _at_most_one(*columns: str) -> str:
    flags = " + ".join(f"(CASE WHEN {col} IS NULL THEN 0 ELSE 1 END)" for col in columns)
    return f"{flags} <= 1"


class Company(Base):
    """Company model."""

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    ledger_entries = relationship("LedgerEntry", back_populates="company")


class Category(Base):
    """Ledger category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Indicator(Base):
    """Indicator model (single ledger tag or composite)."""

    __tablename__ = "indicators"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    indicator_type = Column(String, default="unico", nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    components = relationship(
        "IndicatorComponent",
        back_populates="indicator",
        cascade="all, delete-orphan",
        foreign_keys="IndicatorComponent.indicator_id",
    )


class IndicatorComponent(Base):
    """Composition link of a composite indicator."""

    __tablename__ = "indicator_components"

    id = Column(Integer, primary_key=True)
    indicator_id = Column(Integer, ForeignKey("indicators.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    source_indicator_id = Column(Integer, ForeignKey("indicators.id"), nullable=True)
    sign = Column(String(1), default="+", nullable=False)

    __table_args__ = (
        CheckConstraint(
            _exactly_one("category_id", "source_indicator_id"),
            name="ck_indicator_component_single_source",
        ),
    )

    indicator = relationship("Indicator", back_populates="components", foreign_keys=[indicator_id])


class DreAccount(Base):
    """DRE chart-of-accounts node."""

    __tablename__ = "dre_accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    sign = Column(String(1), default="+", nullable=False)
    parent_id = Column(Integer, ForeignKey("dre_accounts.id"), nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    visible = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    parent = relationship("DreAccount", remote_side=[id], backref="children")
    components = relationship(
        "DreAccountComponent",
        back_populates="account",
        cascade="all, delete-orphan",
        foreign_keys="DreAccountComponent.account_id",
    )
    formula = relationship(
        "DreAccountFormula", back_populates="account", uselist=False, cascade="all, delete-orphan"
    )


class DreAccountCompany(Base):
    """Restricts a DRE account to a company."""

    __tablename__ = "dre_account_companies"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("dre_accounts.id"), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (UniqueConstraint("account_id", "company_id", name="uq_account_company"),)


class DreAccountComponent(Base):
    """Source contributing to a DRE account's value."""

    __tablename__ = "dre_account_components"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("dre_accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    indicator_id = Column(Integer, ForeignKey("indicators.id"), nullable=True)
    source_account_id = Column(Integer, ForeignKey("dre_accounts.id"), nullable=True)
    sign = Column(String(1), default="+", nullable=False)

    __table_args__ = (
        CheckConstraint(
            _exactly_one("category_id", "indicator_id", "source_account_id"),
            name="ck_account_component_single_source",
        ),
    )

    account = relationship("DreAccount", back_populates="components", foreign_keys=[account_id])


class DreAccountFormula(Base):
    """Two-operand formula defining a DRE account's value."""

    __tablename__ = "dre_account_formulas"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("dre_accounts.id"), unique=True, nullable=False)
    operand1_kind = Column(String, nullable=False)
    operand1_id = Column(Integer, nullable=False)
    operator = Column(String(1), nullable=False)
    operand2_kind = Column(String, nullable=False)
    operand2_id = Column(Integer, nullable=False)

    account = relationship("DreAccount", back_populates="formula")


class LedgerEntry(Base):
    """Ledger entry (lancamento) model."""

    __tablename__ = "ledger_entries"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    kind = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    indicator_id = Column(Integer, ForeignKey("indicators.id"), nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_ledger_entry_month"),
        CheckConstraint(
            _at_most_one("category_id", "indicator_id"),
            name="ck_ledger_entry_single_reference",
        ),
    )

    company = relationship("Company", back_populates="ledger_entries")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
