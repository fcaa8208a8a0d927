import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

# Load .env file automatically
load_dotenv()

REQUIRED_CREDENTIALS = (
    "PAYU_CLIENT_ID",
    "PAYU_CLIENT_SECRET",
    "PAYU_MERCHANT_POS_ID",
    "PAYU_SECOND_KEY",
)


class Settings(BaseSettings):
    """Client and receiver settings loaded from environment variables."""

    # PayU merchant credentials (from the PayU panel)
    PAYU_CLIENT_ID: int
    PAYU_CLIENT_SECRET: str
    PAYU_MERCHANT_POS_ID: int
    PAYU_SECOND_KEY: str

    # Transport
    PAYU_SANDBOX: bool = True
    PAYU_REQUEST_TIMEOUT: Optional[float] = None

    # Notification receiver
    PAYU_WEBHOOK_VERIFY_IP: bool = True

    # App settings
    APP_NAME: str = "PayU Client"
    DEBUG: bool = False
    ENVIRONMENT: Literal["development", "test", "production"] = "development"

    # Observability (Optional)
    OTEL_SERVICE_NAME: str = "payu-client"

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def __init__(self, **kwargs):
        missing = [
            name
            for name in REQUIRED_CREDENTIALS
            if name not in kwargs and not os.getenv(name)
        ]
        if missing:
            raise RuntimeError(
                f"{', '.join(missing)} not set; create .env or export the variables"
            )
        super().__init__(**kwargs)
