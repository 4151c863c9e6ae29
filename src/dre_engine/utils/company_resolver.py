"""Utility for resolving company names to IDs."""

from dre_engine.database.base import Database
from dre_engine.domain.errors import NotFoundError, company_not_found


def resolve_company(db: Database, company: str | int) -> int:
    """Resolve company name or ID to company ID.

    Args:
        db: Database instance
        company: Company name (str) or ID (int or string representation of int)

    Returns:
        Company ID

    Raises:
        NotFoundError: If company is not found
    """
    if isinstance(company, int):
        if db.get_company(company) is None:
            raise NotFoundError(company_not_found(company))
        return company

    # Try to parse as integer (handles string IDs like "1")
    try:
        company_id = int(company)
    except (ValueError, TypeError):
        company_id = None

    if company_id is not None:
        if db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))
        return company_id

    found = db.get_company_by_name(company)
    if found is None:
        raise NotFoundError(company_not_found(company))
    return found.id
