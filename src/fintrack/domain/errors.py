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


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def category_not_found(category_id: str) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_category_name(name: str) -> str:
    """Return message for duplicate category name."""
    return f"Category with name '{name}' already exists"


def category_delete_blocked(category_id: str, transaction_count: int) -> str:
    """Return message when a category still has transactions."""
    return (
        f"Cannot delete category {category_id}: it has "
        f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}. "
        "Please reassign or delete them first."
    )


def missing_required_columns(fields: list[str]) -> str:
    """Return message for logical fields left without a CSV column."""
    return f"Missing required columns: {', '.join(fields)}"


def unmatched_categories(names: list[str]) -> str:
    """Return message for imported category names with no match."""
    return (
        f"{len(names)} categor{'ies' if len(names) != 1 else 'y'} not found: "
        f"{', '.join(names)}"
    )
