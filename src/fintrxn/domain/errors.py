"""Shared domain error messages and error types."""

from typing import Any, Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``subject_id`` and ``case``
    identify the contribution and accounting case the error belongs to, when
    known.
    """

    def __init__(self, message: str, subject_id: Any = None, case: Any = None):
        super().__init__(message)
        self.subject_id = subject_id
        self.case = case


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ProtocolViolation(DomainError):
    """After-notification without a matching before-notification."""


class UnresolvedAccount(NotFoundError):
    """A financial account could not be uniquely resolved."""

    def __init__(self, message: str, lookup_key: Any = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.lookup_key = lookup_key


class UnsupportedCase(DomainError):
    """Accounting case whose postings are not defined yet."""


class PersistenceFailure(DomainError):
    """Writing a posting to storage failed."""


def account_not_found(lookup_key: str) -> str:
    """Return message for an unresolvable financial account."""
    return f"Financial account for {lookup_key} not found or not unique"


def campaign_not_found(campaign_id: Any) -> str:
    """Return message for missing campaign."""
    return f"Campaign {campaign_id} not found or not unique"


def missing_field(field: str, purpose: str) -> str:
    """Return message for a record lacking a field needed for resolution."""
    return f"Contribution has no '{field}' to resolve the {purpose} account"


def case_not_supported(case: Any) -> str:
    """Return message for a case without posting semantics."""
    return f"Case '{case}' is not supported yet, no postings derived"


def interleaved_calls(
    expected_operation: Any,
    actual_operation: Any,
    expected_subject: Optional[Any],
    actual_subject: Optional[Any],
) -> str:
    """Return message for a mismatched before/after pair."""
    return (
        f"Interleaved calls: expected {expected_operation} of contribution "
        f"{expected_subject}, got {actual_operation} of contribution {actual_subject}"
    )


def no_pending_session(operation: Any, subject_id: Any) -> str:
    """Return message for an after-notification nobody prepared."""
    return f"No pending generation for {operation} of contribution {subject_id}"


def batch_not_unique(batch_id: int, count: int) -> str:
    """Return message when a batch id does not identify exactly one batch."""
    return f"Could not find a single batch with id {batch_id}, found {count}"
