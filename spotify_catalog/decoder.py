"""Turn raw response bodies into typed models.

Decoding never raises: a body that does not fit the target model is logged
together with the validation error and reported as absent.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Generic, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from utils.logger import log_error

from .errors import SpotifyApiError, SpotifyError, SpotifyTransportError

T = TypeVar("T")


class FailureKind(str, Enum):
    TRANSPORT = "transport"
    REMOTE_REJECTION = "remote_rejection"
    DECODE = "decode"


@dataclass(frozen=True)
class DecodedResult(Generic[T]):
    """Outcome of fetch-and-decode.

    Endpoint methods only expose ``value`` (present or None); the failure kind
    and detail are kept for callers that need to tell the cases apart.
    """

    value: Optional[T] = None
    failure: Optional[FailureKind] = None
    detail: str = ""
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def from_error(cls, error: SpotifyError) -> "DecodedResult[Any]":
        if isinstance(error, SpotifyApiError):
            return cls(failure=FailureKind.REMOTE_REJECTION, detail=error.body, status_code=error.status_code)
        if isinstance(error, SpotifyTransportError):
            return cls(failure=FailureKind.TRANSPORT, detail=str(error))
        raise error


@lru_cache(maxsize=None)
def _adapter(model: Any) -> TypeAdapter:
    return TypeAdapter(model)


def decode_result(model: Type[T], body: str) -> DecodedResult[T]:
    try:
        value = _adapter(model).validate_json(body or "", strict=True)
    except ValidationError as e:
        log_error(f"convert result failed {e}")
        log_error(f"content: {body!r}")
        return DecodedResult(failure=FailureKind.DECODE, detail=str(e))
    return DecodedResult(value=value)


def decode(model: Type[T], body: str) -> Optional[T]:
    return decode_result(model, body).value
