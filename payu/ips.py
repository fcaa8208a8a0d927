"""Source addresses PayU sends notifications from."""

SANDBOX_IPS = [
    "185.68.14.10",
    "185.68.14.11",
    "185.68.14.12",
    "185.68.14.26",
    "185.68.14.27",
    "185.68.14.28",
]

PRODUCTION_IPS = [
    "185.68.12.10",
    "185.68.12.11",
    "185.68.12.12",
    "185.68.12.26",
    "185.68.12.27",
    "185.68.12.28",
]


def allowed_ips(sandbox: bool) -> list[str]:
    return list(SANDBOX_IPS if sandbox else PRODUCTION_IPS)
