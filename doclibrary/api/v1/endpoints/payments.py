"""Payment admin API: listing, stats, refunds, and status changes."""

from fastapi import APIRouter, Depends, Request

from doclibrary.api.v1.dependencies import OptionalSession, get_payment_report_service
from doclibrary.application.use_cases.payments import PaymentReportService
from doclibrary.core.limiter import limit_writes
from doclibrary.schemas.payment import (
    PaymentResponse,
    PaymentStatsResponse,
    PaymentStatusUpdate,
)

router = APIRouter()


@router.get("", response_model=list[PaymentResponse])
async def list_payments(
    session: OptionalSession,
    reports: PaymentReportService = Depends(get_payment_report_service),
):
    payments = await reports.fetch_payments(session)
    return [PaymentResponse.model_validate(p) for p in payments]


@router.get("/stats", response_model=PaymentStatsResponse)
async def payment_stats(
    session: OptionalSession,
    reports: PaymentReportService = Depends(get_payment_report_service),
):
    """Revenue over completed payments; success and refund rates as percentages."""
    stats = await reports.get_payment_stats(session)
    return PaymentStatsResponse.model_validate(stats)


@router.post("/{payment_id}/refund", status_code=204)
@limit_writes
async def refund_payment(
    request: Request,
    payment_id: str,
    session: OptionalSession,
    reports: PaymentReportService = Depends(get_payment_report_service),
):
    await reports.refund_payment(session, payment_id)


@router.patch("/{payment_id}/status", status_code=204)
@limit_writes
async def update_payment_status(
    request: Request,
    payment_id: str,
    body: PaymentStatusUpdate,
    session: OptionalSession,
    reports: PaymentReportService = Depends(get_payment_report_service),
):
    await reports.update_payment_status(session, payment_id, body.status)
