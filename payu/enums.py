from enum import Enum as PyEnum


class Currency(str, PyEnum):
    BGN = "BGN"
    CHF = "CHF"
    CZK = "CZK"
    DKK = "DKK"
    EUR = "EUR"
    GBP = "GBP"
    HRK = "HRK"
    HUF = "HUF"
    NOK = "NOK"
    PLN = "PLN"
    RON = "RON"
    SEK = "SEK"
    UAH = "UAH"
    USD = "USD"


class Country(str, PyEnum):
    AT = "AT"
    BE = "BE"
    BG = "BG"
    CH = "CH"
    CZ = "CZ"
    DE = "DE"
    DK = "DK"
    ES = "ES"
    FR = "FR"
    GB = "GB"
    HR = "HR"
    HU = "HU"
    IT = "IT"
    LT = "LT"
    LV = "LV"
    NL = "NL"
    NO = "NO"
    PL = "PL"
    PT = "PT"
    RO = "RO"
    SE = "SE"
    SK = "SK"
    UA = "UA"
    US = "US"


class PaymentStatus(str, PyEnum):
    """Order status reported in payment notifications."""

    PENDING = "PENDING"
    WAITING_FOR_CONFIRMATION = "WAITING_FOR_CONFIRMATION"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class PayMethodType(str, PyEnum):
    PBL = "PBL"
    CARD_TOKEN = "CARD_TOKEN"
    INSTALLMENTS = "INSTALLMENTS"


class OrderStatus(str, PyEnum):
    """Target status for the order status update call."""

    COMPLETED = "COMPLETED"
