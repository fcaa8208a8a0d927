from payu.client import PayU
from payu.endpoints import (
    AUTHORIZE_ENDPOINT,
    ORDER_ENDPOINT,
    PRODUCTION_ENDPOINT,
    SANDBOX_ENDPOINT,
)
from payu.enums import Country, Currency, OrderStatus, PaymentStatus, PayMethodType
from payu.errors import AuthenticationError, PayUError
from payu.ips import PRODUCTION_IPS, SANDBOX_IPS
from payu.oauth import OAuth
from payu.schemas import (
    AuthenticationErrorResponse,
    AuthenticationResponse,
    Buyer,
    Delivery,
    NotificationOrder,
    Order,
    OrderCreateResponse,
    OrderStatusResponse,
    PaymentNotification,
    PayMethod,
    Product,
    Property,
    Status,
)
from payu.signature import SignatureVerifier, parse_header

__all__ = [
    "AUTHORIZE_ENDPOINT",
    "ORDER_ENDPOINT",
    "PRODUCTION_ENDPOINT",
    "PRODUCTION_IPS",
    "SANDBOX_ENDPOINT",
    "SANDBOX_IPS",
    "AuthenticationError",
    "AuthenticationErrorResponse",
    "AuthenticationResponse",
    "Buyer",
    "Country",
    "Currency",
    "Delivery",
    "NotificationOrder",
    "OAuth",
    "Order",
    "OrderCreateResponse",
    "OrderStatus",
    "OrderStatusResponse",
    "PayMethod",
    "PayMethodType",
    "PayU",
    "PayUError",
    "PaymentNotification",
    "PaymentStatus",
    "Product",
    "Property",
    "SignatureVerifier",
    "Status",
    "parse_header",
]
