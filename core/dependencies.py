from core.settings import Settings
from payu.client import PayU

# Singletons
_settings = None
_payu = None


def get_settings() -> Settings:
    """Dependency that provides application settings."""
    assert (
        _settings is not None
    ), "Settings not initialized. Make sure startup() was called."
    return _settings


def get_payu() -> PayU:
    """Dependency that provides the shared PayU client."""
    assert _payu is not None, "PayU client not initialized."
    return _payu


def init_settings():
    """Initialize settings and the client built from them."""
    global _settings, _payu
    _settings = Settings()
    _payu = PayU.from_settings(_settings)


def clear_settings():
    global _settings, _payu
    if _payu is not None:
        _payu.close()
    _settings = None
    _payu = None
