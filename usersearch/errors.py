from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_PARAMS = "invalid_params"
    UNAUTHORIZED = "unauthorized"
    SERVER_FAULT = "server_fault"
    TRANSPORT = "transport"
    DECODE_ERROR = "decode_error"


RETRYABLE_KINDS = frozenset({ErrorKind.SERVER_FAULT, ErrorKind.TRANSPORT})


class SearchError(Exception):
    """Terminal failure of a user search call.

    ``kind`` tells callers what went wrong; ``message`` keeps the exact
    text the search service contract uses (``"Bad AccessToken"``,
    ``"cant unpack result json"``...), so matching on ``str(err)`` still works.
    """

    def __init__(self, kind: ErrorKind, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        return self.kind in RETRYABLE_KINDS

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"SearchError(kind={self.kind.value!r}, message={self.message!r})"
