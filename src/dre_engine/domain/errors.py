"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DataAccessError(DomainError):
    """The underlying data store failed while serving a read."""


def company_not_found(company: int | str) -> str:
    """Return message for missing company by ID or name."""
    if isinstance(company, int):
        return f"Company ID {company} not found"
    return f"Company '{company}' not found"


def invalid_month(month: int) -> str:
    """Return message for a month outside 1..12."""
    return f"Invalid month {month}: expected a value between 1 and 12"


def invalid_operator(operator: str) -> str:
    """Return message for an unsupported formula operator."""
    return f"Unsupported formula operator '{operator}'. Expected one of: +, -, *, /"


def cyclic_account(account_id: int) -> str:
    """Return message when an account transitively references itself."""
    return f"Account {account_id} references itself through its children, components or formula"


def cyclic_indicator(indicator_id: int) -> str:
    """Return message when an indicator composition references itself."""
    return f"Indicator {indicator_id} references itself through its composition"


def data_access_failed(operation: str, error: Exception) -> str:
    """Return message for a failed read against the data store."""
    return f"Could not read {operation} from the database: {error}"
