"""PayU REST API locations."""

SANDBOX_ENDPOINT = "https://secure.snd.payu.com"
PRODUCTION_ENDPOINT = "https://secure.payu.com"

AUTHORIZE_ENDPOINT = "pl/standard/user/oauth/authorize"
ORDER_ENDPOINT = "api/v2_1/orders"


def base_endpoint(sandbox: bool) -> str:
    return SANDBOX_ENDPOINT if sandbox else PRODUCTION_ENDPOINT


def build_url(base: str, path: str) -> str:
    return f"{base.rstrip('/')}/{path.lstrip('/')}"
