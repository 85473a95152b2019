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


class DeserializationError(DomainError):
    """A stored value could not be decoded into the expected structure."""


def category_not_found(category_id: str) -> str:
    """Return message for an unknown category id."""
    return f"Category '{category_id}' not found"


def sub_activity_not_found(sub_activity_id: str) -> str:
    """Return message for a missing sub-activity."""
    return f"Sub-activity '{sub_activity_id}' not found"


def invalid_time_label(label: str) -> str:
    """Return message for a time that is not on the 5-minute grid."""
    return f"Invalid time '{label}': expected HH:MM on a 5-minute boundary"


def invalid_slot_range(start: int, end: int) -> str:
    """Return message for an empty or out-of-bounds slot range."""
    return f"Invalid slot range {start}..{end}: expected 0 <= start < end <= 288"
