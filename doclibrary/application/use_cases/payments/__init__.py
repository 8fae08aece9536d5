"""Payment use cases: checkout and reporting."""

from doclibrary.application.use_cases.payments.checkout import CheckoutService
from doclibrary.application.use_cases.payments.payment_reports import (
    PaymentReportService,
)

__all__ = ["CheckoutService", "PaymentReportService"]
