"""Payment reporting for the admin dashboard: listing, statistics, refunds, status changes."""

from __future__ import annotations

import logging

from doclibrary.application.dtos.payment import PaymentStats, PaymentView
from doclibrary.application.interfaces.repositories import IPaymentRepository
from doclibrary.application.services.authorization_service import AuthorizationService
from doclibrary.domain.enums import PaymentStatus
from doclibrary.domain.exceptions import (
    DocLibraryException,
    ResourceNotFoundException,
    ValidationException,
)
from doclibrary.domain.value_objects.metadata import merge_metadata
from doclibrary.shared.context import SessionContext
from doclibrary.shared.utils.datetime import to_iso, utc_now

logger = logging.getLogger(__name__)


def _percent(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole else 0.0


class PaymentReportService:
    """All operations are admin-only."""

    def __init__(
        self, payment_repo: IPaymentRepository, authorization: AuthorizationService
    ) -> None:
        self.payment_repo = payment_repo
        self.authorization = authorization

    async def fetch_payments(self, ctx: SessionContext | None) -> list[PaymentView]:
        """Return every payment with payer and payment method, newest first."""
        await self.authorization.require_admin(ctx, "payment", "view")
        try:
            return await self.payment_repo.list_views()
        except DocLibraryException as e:
            logger.error("Error fetching payments: %s", e.message)
            raise

    async def get_payment_stats(self, ctx: SessionContext | None) -> PaymentStats:
        """Revenue and rates over all payments. Rates are percentages; 0 with no payments."""
        await self.authorization.require_admin(ctx, "payment", "view")
        rows = await self.payment_repo.list_rows()
        completed = [r for r in rows if r.get("status") == PaymentStatus.COMPLETED.value]
        refunded = [r for r in rows if r.get("status") == PaymentStatus.REFUNDED.value]
        total_revenue = sum(float(r.get("amount") or 0) for r in completed)
        return PaymentStats(
            total_revenue=total_revenue,
            success_rate=_percent(len(completed), len(rows)),
            average_amount=total_revenue / (len(completed) or 1),
            refund_rate=_percent(len(refunded), len(rows)),
        )

    async def refund_payment(self, ctx: SessionContext | None, payment_id: str) -> None:
        """Mark a payment refunded and stamp metadata.refunded_at (other metadata is kept)."""
        ctx = await self.authorization.require_admin(ctx, "payment", "refund")
        metadata = await self.payment_repo.get_metadata(payment_id)
        if metadata is None:
            raise ResourceNotFoundException("payment", payment_id)
        await self.payment_repo.update(
            payment_id,
            {
                "status": PaymentStatus.REFUNDED.value,
                "metadata": merge_metadata(metadata, {"refunded_at": to_iso(utc_now())}),
            },
        )
        logger.info("Payment %s refunded by %s", payment_id, ctx.user_id)

    async def update_payment_status(
        self, ctx: SessionContext | None, payment_id: str, status: str
    ) -> None:
        await self.authorization.require_admin(ctx, "payment", "update")
        if status not in PaymentStatus.values():
            raise ValidationException(
                f"Invalid payment status: {status!r}. Must be one of {PaymentStatus.values()}",
                field="status",
            )
        await self.payment_repo.update(payment_id, {"status": status})
