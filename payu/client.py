"""
PayU Client

This module wraps the PayU REST API:
- OAuth token management (delegated to ``payu.oauth``)
- Order creation, capture, cancellation and refund
- Notification signature and source IP verification

Requests are sent once; nothing is retried. A rejected call raises
``PayUError`` with the status PayU returned, any other failure raises the
underlying ``requests`` exception.
"""

import time
from typing import Any, Optional, Union

import requests
import structlog
from pydantic import ValidationError

from core.logging import BusinessEvents
from core.metrics import api_latency, api_requests_total
from core.settings import Settings
from core.tracing import get_tracer
from payu.endpoints import ORDER_ENDPOINT, base_endpoint, build_url
from payu.enums import OrderStatus
from payu.errors import PayUError
from payu.ips import allowed_ips
from payu.oauth import OAuth
from payu.schemas import Order, OrderCreateResponse, OrderStatusResponse
from payu.signature import SignatureVerifier

log = structlog.get_logger(__name__)
tracer = get_tracer(__name__)

# Order creation answers 302 with a redirectUri for the payer
CREATE_ORDER_SUCCESS = (200, 201, 302)


def _decode_json(response: requests.Response) -> Optional[Any]:
    try:
        return response.json()
    except ValueError:
        return None


def _parse_success(model, body, operation: str):
    """Build a response model from an accepted call's body.

    PayU already accepted the call, so a body that does not fit the model is
    kept as-is (unvalidated) instead of failing the caller.
    """
    if not isinstance(body, dict):
        body = {}
    try:
        return model.model_validate(body)
    except ValidationError as e:
        log.warning(
            BusinessEvents.PAYMENT_UNEXPECTED_BODY,
            operation=operation,
            errors=e.error_count(),
        )
        return model.model_construct(**body)


class PayU:
    def __init__(
        self,
        client_id: int,
        client_secret: str,
        merchant_pos_id: int,
        second_key: str,
        sandbox: bool = False,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Create a PayU client.

        Args:
            client_id: client id for merchant
            client_secret: client secret from panel
            merchant_pos_id: pos id from panel
            second_key: second key from panel, used to verify notifications
            sandbox: talk to the sandbox environment instead of production
            session: HTTP session to send requests with
            timeout: per-request timeout handed to requests
        """
        self.client_id = client_id
        self.merchant_pos_id = merchant_pos_id
        self.sandbox = sandbox
        self.timeout = timeout

        self.base_url = base_endpoint(sandbox)
        self.ips = allowed_ips(sandbox)
        self.session = session or requests.Session()

        self.oauth = OAuth(
            self.session,
            self.base_url,
            client_id,
            client_secret,
            timeout=timeout,
        )
        self.verifier = SignatureVerifier(second_key)

    @classmethod
    def from_settings(
        cls, settings: Settings, session: Optional[requests.Session] = None
    ) -> "PayU":
        return cls(
            settings.PAYU_CLIENT_ID,
            settings.PAYU_CLIENT_SECRET,
            settings.PAYU_MERCHANT_POS_ID,
            settings.PAYU_SECOND_KEY,
            sandbox=settings.PAYU_SANDBOX,
            session=session,
            timeout=settings.PAYU_REQUEST_TIMEOUT,
        )

    def close(self):
        self.session.close()

    def get_access_token(self) -> str:
        """Get access token, raises ``AuthenticationError`` on rejection."""
        return self.oauth.get_access_token()

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.oauth.get_access_token()}"}

    def _request(
        self, operation: str, method: str, path: str, **kwargs
    ) -> requests.Response:
        url = build_url(self.base_url, path)
        start = time.perf_counter()
        with tracer.start_as_current_span(f"payu.{operation}") as span:
            span.set_attribute("http.method", method)
            span.set_attribute("http.url", url)
            try:
                response = self.session.request(
                    method,
                    url,
                    headers=self._auth_headers(),
                    timeout=self.timeout,
                    **kwargs,
                )
            except Exception as e:
                # token or transport failure, no PayU answer to decode
                api_requests_total.labels(operation=operation, outcome="failure").inc()
                log.error(
                    BusinessEvents.PAYMENT_FAILURE,
                    operation=operation,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise
            finally:
                api_latency.labels(operation=operation).observe(
                    time.perf_counter() - start
                )
            span.set_attribute("http.status_code", response.status_code)
        return response

    def _fail(self, operation: str, order_id: Optional[str], response, error=None):
        """Raise ``PayUError`` from a JSON status body, else the transport error."""
        api_requests_total.labels(operation=operation, outcome="failure").inc()
        body = _decode_json(response)
        if not isinstance(body, dict) or not isinstance(body.get("status"), dict):
            log.error(
                BusinessEvents.PAYMENT_FAILURE,
                operation=operation,
                order_id=order_id,
                http_status=response.status_code,
            )
            if error is not None:
                raise error
            raise requests.HTTPError(
                f"{response.status_code} error from PayU {operation}",
                response=response,
            )

        payu_error = PayUError.from_body(body)
        log.error(
            BusinessEvents.PAYMENT_FAILURE,
            operation=operation,
            order_id=order_id,
            http_status=response.status_code,
            status_code=payu_error.status_code,
            code=payu_error.code,
            code_literal=payu_error.code_literal,
        )
        raise payu_error from error

    def _status_call(
        self, operation: str, order_id: str, method: str, path: str, **kwargs
    ) -> OrderStatusResponse:
        log.info(BusinessEvents.PAYMENT_ATTEMPT, operation=operation, order_id=order_id)
        response = self._request(operation, method, path, **kwargs)
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            self._fail(operation, order_id, response, e)

        body = _decode_json(response)
        result = _parse_success(OrderStatusResponse, body, operation)
        api_requests_total.labels(operation=operation, outcome="success").inc()
        log.info(
            BusinessEvents.PAYMENT_SUCCESS,
            operation=operation,
            order_id=order_id,
            status=body.get("status") if isinstance(body, dict) else None,
        )
        return result

    def create_order(self, order: Union[Order, dict[str, Any]]) -> OrderCreateResponse:
        """
        Create a new order.

        Args:
            order: order to be created, ``merchantPosId`` is filled in here

        Returns:
            OrderCreateResponse with the PayU order id and payer redirect

        Raises:
            PayUError: PayU answered outside 200/201/302
        """
        if not isinstance(order, Order):
            order = Order.model_validate(order)
        data = {**order.to_payload(), "merchantPosId": str(self.merchant_pos_id)}

        log.info(
            BusinessEvents.PAYMENT_ATTEMPT,
            operation="create_order",
            ext_order_id=order.ext_order_id,
            total_amount=order.total_amount,
            currency=order.currency_code,
        )
        response = self._request(
            "create_order", "POST", ORDER_ENDPOINT, json=data, allow_redirects=False
        )

        if response.status_code not in CREATE_ORDER_SUCCESS:
            self._fail("create_order", None, response)

        body = _decode_json(response)
        result = _parse_success(OrderCreateResponse, body, "create_order")
        api_requests_total.labels(operation="create_order", outcome="success").inc()
        log.info(
            BusinessEvents.PAYMENT_SUCCESS,
            operation="create_order",
            order_id=result.order_id,
            ext_order_id=order.ext_order_id,
            http_status=response.status_code,
        )
        return result

    def capture_order(self, order_id: str) -> OrderStatusResponse:
        """Captures an order from PayU making it approved."""
        data = {"orderId": order_id, "orderStatus": OrderStatus.COMPLETED.value}
        return self._status_call(
            "capture_order",
            order_id,
            "PUT",
            f"{ORDER_ENDPOINT}/{order_id}/status",
            json=data,
        )

    def cancel_order(self, order_id: str) -> OrderStatusResponse:
        """Cancels a PayU order."""
        return self._status_call(
            "cancel_order", order_id, "DELETE", f"{ORDER_ENDPOINT}/{order_id}"
        )

    def refund_order(self, order_id: str, description: str) -> OrderStatusResponse:
        """Refunds a PayU order.

        Args:
            order_id: PayU order id
            description: description for refund
        """
        return self._status_call(
            "refund_order",
            order_id,
            "POST",
            f"{ORDER_ENDPOINT}/{order_id}/refund",
            json={"refund": {"description": description}},
        )

    def verify_notification(self, payu_header: str, notification: Union[str, bytes]) -> bool:
        """Verify notification body with the ``OpenPayu-Signature`` header."""
        return self.verifier.verify(payu_header, notification)

    def is_ip_valid(self, ip: str) -> bool:
        """Validates the IP address with PayU servers."""
        return ip in self.ips
