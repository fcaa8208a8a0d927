"""
PayU error types.

Only two failures are translated: a rejected credential exchange and an
order call answered with a PayU status body. Everything else raised by the
transport (connection errors, timeouts, non-JSON error pages) reaches the
caller as the original ``requests`` exception.
"""


class AuthenticationError(Exception):
    """The authorization endpoint rejected the client credentials."""

    def __init__(self, error: str, error_description: str):
        super().__init__(f"{error}: {error_description}")
        self.error = error
        self.error_description = error_description


class PayUError(Exception):
    """An order call was answered outside the accepted status set."""

    def __init__(
        self,
        status_code: str,
        code: str,
        code_literal: str | None,
        status_desc: str | None,
    ):
        super().__init__(f"{status_code} ({code_literal or code}): {status_desc}")
        self.status_code = status_code
        self.code = code
        self.code_literal = code_literal
        self.status_desc = status_desc

    @classmethod
    def from_body(cls, body: dict) -> "PayUError":
        """Build the error from a decoded ``OrderStatusResponse`` body."""
        status = body.get("status") or {}
        return cls(
            status.get("statusCode", ""),
            status.get("code") or "",
            status.get("codeLiteral"),
            status.get("statusDesc"),
        )
