"""Stand-in payment gateway.

No card is charged; every charge succeeds with a fabricated test token
so checkout can run end to end.
"""

from __future__ import annotations

import time

import structlog

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)


class StubPaymentGateway:

    def charge(self, amount: Money, customer_email: str) -> str:
        """Pretend to capture ``amount`` and return a payment reference."""
        if amount.minor_units <= 0:
            raise ValidationError("Payment amount must be greater than zero")
        reference = f"pi_test_{int(time.time() * 1000)}"
        logger.info(
            "payment_stubbed",
            reference=reference,
            amount=str(amount),
            customer_email=customer_email,
        )
        return reference
