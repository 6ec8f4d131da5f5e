"""Connection record and normalized request outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field


class Connection(BaseModel):
    """Credentials and base address for one authenticated session."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    instance_url: str = Field(
        ...,
        min_length=1,
        description="Base address every request path is appended to (e.g. 'https://na1.salesforce.com').",
    )
    access_token: str = Field(
        ...,
        min_length=1,
        repr=False,
        description="Bearer credential sent in the Authorization header.",
    )


@dataclass(frozen=True)
class Success:
    """A 2xx response. ``body`` is ``None`` when the payload was empty."""

    body: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A response outside [200, 300). Transport errors use status ``0``."""

    status_code: int

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class MalformedBody:
    """A 2xx response whose payload could not be parsed as JSON."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return False


NormalizedResult = Union[Success, Failure, MalformedBody]

Action = Callable[..., Awaitable[NormalizedResult]]
RetryArgsProvider = Callable[[], Awaitable[Optional[Sequence[Any]]]]


__all__ = [
    "Connection",
    "Success",
    "Failure",
    "MalformedBody",
    "NormalizedResult",
    "Action",
    "RetryArgsProvider",
]
