"""
Notification signature verification.

PayU signs every notification with the merchant's second key and sends the
result in the ``OpenPayu-Signature`` header, e.g.::

    sender=checkout;signature=d47d8a771d558c29285887febddd9327;algorithm=MD5;content=DOCUMENT

The signature is the hex digest of the raw notification body followed by
the second key.
"""

import hashlib
import hmac
from typing import Union

SIGNATURE_HEADERS = ("OpenPayu-Signature", "X-OpenPayU-Signature")


def parse_header(header: str) -> dict[str, str]:
    """Convert a ``key=value;key=value`` header into a dict.

    Empty segments are skipped, values may contain ``=`` and a repeated key
    keeps its last value.
    """
    tokens: dict[str, str] = {}
    for segment in header.split(";"):
        if not segment:
            continue
        key, _, value = segment.partition("=")
        tokens[key] = value
    return tokens


class SignatureVerifier:
    def __init__(self, second_key: str):
        self.second_key = second_key

    def sign(self, payload: Union[str, bytes]) -> str:
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        return hashlib.md5(payload + self.second_key.encode("utf-8")).hexdigest()

    def verify(self, header: str, payload: Union[str, bytes]) -> bool:
        """Check a notification body against its signature header."""
        tokens = parse_header(header or "")
        signature = tokens.get("signature", "")
        # algorithm must be present; MD5 is the only scheme PayU uses here
        if not signature or not tokens.get("algorithm"):
            return False

        expected = self.sign(payload)
        return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
