"""
PayU request/response schemas.

Attributes are snake_case; the wire format is PayU's camelCase, so every
model aliases its fields and accepts either spelling on input. Unknown
fields returned by PayU are kept rather than rejected.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from payu.enums import PaymentStatus, PayMethodType


class PayUModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        use_enum_values=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the wire: camelCase keys, unset optionals dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Auth


class AuthenticationResponse(BaseModel):
    """Token endpoint answer; OAuth fields are snake_case on the wire."""

    access_token: str
    token_type: Optional[str] = None
    expires_in: int
    grant_type: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class AuthenticationErrorResponse(BaseModel):
    error: str
    error_description: str = ""

    model_config = ConfigDict(extra="allow")


# Orders


class Delivery(PayUModel):
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country_code: Optional[str] = None
    state: Optional[str] = None
    street: Optional[str] = None
    recipient_name: Optional[str] = None
    recipient_phone: Optional[str] = None
    recipient_email: Optional[str] = None


class Buyer(PayUModel):
    ext_customer_id: Optional[str] = None
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    language: Optional[str] = None
    delivery: Optional[Delivery] = None


class Product(PayUModel):
    name: str
    unit_price: str  # minor units, e.g. "1500" for 15.00
    quantity: str
    virtual: Optional[bool] = None
    listing_date: Optional[str] = None


class Order(PayUModel):
    """Order to create. ``merchantPosId`` is added by the client."""

    ext_order_id: Optional[str] = None
    notify_url: Optional[str] = None
    continue_url: Optional[str] = None
    customer_ip: str
    description: str
    additional_description: Optional[str] = None
    currency_code: str
    total_amount: str
    validity_time: Optional[str] = None
    buyer: Optional[Buyer] = None
    products: list[Product] = Field(default_factory=list)


class Status(PayUModel):
    status_code: str
    code: Optional[str] = None
    code_literal: Optional[str] = None
    status_desc: Optional[str] = None


class OrderCreateResponse(PayUModel):
    status: Optional[Status] = None
    redirect_uri: Optional[str] = None
    order_id: Optional[str] = None
    ext_order_id: Optional[str] = None


class OrderStatusResponse(PayUModel):
    status: Status
    orders: Optional[list[dict[str, Any]]] = None
    properties: Optional[list[dict[str, Any]]] = None


# Notifications


class PayMethod(PayUModel):
    type: PayMethodType


class Property(PayUModel):
    name: str
    value: str


class NotificationOrder(PayUModel):
    order_id: str
    ext_order_id: Optional[str] = None
    order_create_date: Optional[str] = None  # ISO timestamp, e.g. 2012-12-31T12:00:00
    notify_url: Optional[str] = None
    customer_ip: Optional[str] = None
    merchant_pos_id: Optional[str] = None
    description: Optional[str] = None
    currency_code: str
    total_amount: str
    buyer: Optional[Buyer] = None
    pay_method: Optional[PayMethod] = None
    products: list[Product] = Field(default_factory=list)
    status: PaymentStatus


class PaymentNotification(PayUModel):
    order: NotificationOrder
    local_receipt_date_time: Optional[str] = None
    properties: list[Property] = Field(default_factory=list)
