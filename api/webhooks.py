"""
Webhook handler for PayU payment notifications
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from core.dependencies import get_payu, get_settings
from core.logging import BusinessEvents
from core.metrics import notifications_total
from core.settings import Settings
from payu.client import PayU
from payu.schemas import PaymentNotification
from payu.signature import SIGNATURE_HEADERS

router = APIRouter()

log = structlog.get_logger(__name__)


def _reject(result: str, status_code: int, detail: str, **fields):
    notifications_total.labels(result=result).inc()
    log.warning(BusinessEvents.NOTIFICATION_REJECTED, reason=result, **fields)
    raise HTTPException(status_code=status_code, detail=detail)


@router.post("/webhook/payu")
async def payu_webhook(
    request: Request,
    payu: PayU = Depends(get_payu),
    settings: Settings = Depends(get_settings),
):
    client_ip = request.client.host if request.client else None
    if settings.PAYU_WEBHOOK_VERIFY_IP and not payu.is_ip_valid(client_ip or ""):
        _reject("bad_ip", 403, "source address not allowed", client_ip=client_ip)

    signature = next(
        (request.headers[h] for h in SIGNATURE_HEADERS if h in request.headers), None
    )
    if not signature:
        _reject("bad_signature", 400, "signature missing", client_ip=client_ip)

    # verify against the raw bytes, re-serialized JSON would not match
    payload = await request.body()
    if not payu.verify_notification(signature, payload):
        _reject("bad_signature", 400, "Invalid signature", client_ip=client_ip)

    try:
        notification = PaymentNotification.model_validate_json(payload)
    except ValidationError as e:
        _reject("invalid", 422, "Invalid notification body", error=str(e))

    order = notification.order
    notifications_total.labels(result="accepted").inc()
    log.info(
        BusinessEvents.NOTIFICATION_RECEIVED,
        order_id=order.order_id,
        ext_order_id=order.ext_order_id,
        order_status=order.status,
    )
    return {"status": "received", "order_id": order.order_id, "order_status": order.status}
