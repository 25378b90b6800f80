from decimal import Decimal

import pytest

from marquee.models import PaymentMethod
from marquee.services.payment import (
    PaymentResult,
    PaymentTimeout,
    SimulatedPaymentGateway,
    get_payment_gateway,
)


def test_success():
    gateway = SimulatedPaymentGateway("success")
    assert gateway.charge(Decimal("400.00"), PaymentMethod.UPI, "MRQ-AAAA1111") == PaymentResult.SUCCEEDED


def test_decline():
    gateway = SimulatedPaymentGateway("failure")
    assert gateway.charge(Decimal("400.00"), PaymentMethod.CREDIT, "MRQ-AAAA1111") == PaymentResult.DECLINED


def test_timeout():
    gateway = SimulatedPaymentGateway("timeout")
    with pytest.raises(PaymentTimeout):
        gateway.charge(Decimal("400.00"), PaymentMethod.DEBIT, "MRQ-AAAA1111")


def test_unknown_outcome_rejected():
    with pytest.raises(ValueError):
        SimulatedPaymentGateway("maybe")


def test_dependency_reads_settings():
    gateway = get_payment_gateway()
    assert gateway.outcome == "success"
    assert gateway.delay_seconds == 0.0
