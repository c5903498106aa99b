"""Domain-level exceptions.

Every failure the storefront reports is a subclass of DomainException so the
CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all storefront errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(DomainException):
    """The backing store failed (network fault, HTTP error, rejected request)."""


class PartialOrderError(DomainException):
    """Checkout wrote some rows and then failed.

    Carries what was committed so the caller can reconcile by hand or
    retry the remaining steps.
    """

    def __init__(
        self,
        message: str,
        *,
        failed_step: str,
        completed_steps: tuple[str, ...],
        customer_id: str | None = None,
        order_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.failed_step = failed_step
        self.completed_steps = completed_steps
        self.customer_id = customer_id
        self.order_id = order_id
