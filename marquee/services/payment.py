import enum
import logging
import time
from decimal import Decimal
from typing import Protocol

from marquee.core.config import settings
from marquee.models.booking import PaymentMethod

logger = logging.getLogger(__name__)


class PaymentResult(str, enum.Enum):
    SUCCEEDED = "succeeded"
    DECLINED = "declined"


class PaymentTimeout(Exception):
    """The gateway did not answer in time; the charge may or may not have happened."""


class PaymentGateway(Protocol):
    def charge(self, amount: Decimal, method: PaymentMethod, reference: str) -> PaymentResult:
        ...


class SimulatedPaymentGateway:
    """
    Stand-in for a real gateway. Card / UPI details are collected elsewhere, so
    a charge here only decides an outcome: succeed, decline, or time out.
    """

    OUTCOMES = ("success", "failure", "timeout")

    def __init__(self, outcome: str = "success", delay_seconds: float = 0.0):
        if outcome not in self.OUTCOMES:
            raise ValueError(f"Unknown simulated payment outcome: {outcome!r}")
        self.outcome = outcome
        self.delay_seconds = delay_seconds

    def charge(self, amount: Decimal, method: PaymentMethod, reference: str) -> PaymentResult:
        if self.delay_seconds:
            time.sleep(self.delay_seconds)
        logger.info("Simulated %s charge of %s for %s -> %s", method.value, amount, reference, self.outcome)
        if self.outcome == "timeout":
            raise PaymentTimeout(f"Payment for {reference} timed out")
        if self.outcome == "failure":
            return PaymentResult.DECLINED
        return PaymentResult.SUCCEEDED


def get_payment_gateway() -> PaymentGateway:
    return SimulatedPaymentGateway(
        outcome=settings.PAYMENT_SIMULATED_OUTCOME,
        delay_seconds=settings.PAYMENT_DELAY_SECONDS,
    )
