"""One-shot credential-refresh retry around any dispatcher-based action.

An orchestrated call moves through a short, linear state machine::

    FIRST_ATTEMPT --401--> RETRYING --args--> SECOND_ATTEMPT --> DONE
          |                    |
          +--------------------+----------------------------------> DONE

Only a 401 on the first attempt leads to a retry. The second attempt is
terminal: whatever it returns, a repeated 401 included, ends the call.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable, Optional, Sequence

from salesforce.errors import (
    ActionFailedError,
    MalformedResponseError,
    RetryArgsUnavailableError,
    RetryExhaustedError,
)
from salesforce.model import Action, Failure, MalformedBody, NormalizedResult, RetryArgsProvider

UNAUTHORIZED_STATUS = 401

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Any], None]


class RetryState(str, enum.Enum):
    FIRST_ATTEMPT = "first_attempt"
    RETRYING = "retrying"
    SECOND_ATTEMPT = "second_attempt"
    DONE = "done"


def _action_name(action: Action) -> str:
    return getattr(action, "__name__", repr(action))


class RetryCall:
    """A single orchestrated call. Instances are not reusable, even after a raise."""

    def __init__(
        self,
        action: Action,
        args: Sequence[Any],
        get_retry_args: RetryArgsProvider,
        **kwargs: Any,
    ) -> None:
        self.action = action
        self.args = tuple(args)
        self.get_retry_args = get_retry_args
        self.kwargs = kwargs
        self.state = RetryState.FIRST_ATTEMPT
        self.attempts = 0

    async def run(self) -> Any:
        if self.state is not RetryState.FIRST_ATTEMPT or self.attempts:
            raise RuntimeError("RetryCall has already been run.")
        try:
            return await self._run()
        finally:
            self.state = RetryState.DONE

    async def _run(self) -> Any:
        result = await self._invoke(self.args)
        body = self._handle_first(result)
        if self.state is RetryState.DONE:
            return body

        try:
            retry_args = await self.get_retry_args()
        except Exception as exc:
            logger.warning(
                "Retry-args provider for %s failed: %s", _action_name(self.action), exc
            )
            raise RetryArgsUnavailableError() from exc
        if retry_args is None:
            logger.warning("No refreshed arguments for %s; giving up.", _action_name(self.action))
            raise RetryArgsUnavailableError()

        self.state = RetryState.SECOND_ATTEMPT
        logger.info("Retrying %s with refreshed arguments.", _action_name(self.action))
        result = await self._invoke(tuple(retry_args))
        return self._handle_retry(result)

    async def _invoke(self, args: tuple[Any, ...]) -> NormalizedResult:
        self.attempts += 1
        return await self.action(*args, **self.kwargs)

    def _handle_first(self, result: NormalizedResult) -> Any:
        if isinstance(result, Failure):
            if result.status_code == UNAUTHORIZED_STATUS:
                logger.info(
                    "%s was rejected with status 401; requesting refreshed arguments.",
                    _action_name(self.action),
                )
                self.state = RetryState.RETRYING
                return None
            self.state = RetryState.DONE
            raise ActionFailedError(result.status_code)
        self.state = RetryState.DONE
        if isinstance(result, MalformedBody):
            raise MalformedResponseError(result.status_code, result.text)
        return result.body

    def _handle_retry(self, result: NormalizedResult) -> Any:
        self.state = RetryState.DONE
        if isinstance(result, Failure):
            raise RetryExhaustedError(result.status_code)
        if isinstance(result, MalformedBody):
            raise MalformedResponseError(result.status_code, result.text)
        return result.body


async def call_with_retry(
    action: Action,
    args: Sequence[Any],
    get_retry_args: RetryArgsProvider,
    **kwargs: Any,
) -> Any:
    """Run ``action(*args, **kwargs)`` and retry once with fresh args on a 401.

    Returns the response body (``None`` for empty bodies). Raises
    ``ActionFailedError``, ``RetryArgsUnavailableError``,
    ``RetryExhaustedError`` or ``MalformedResponseError`` for the terminal
    failure cases. ``kwargs`` are forwarded unchanged to both attempts.
    """

    return await RetryCall(action, args, get_retry_args, **kwargs).run()


async def api_call_with_retry(
    action: Action,
    args: Sequence[Any],
    get_retry_args: RetryArgsProvider,
    callback: Callback,
    **kwargs: Any,
) -> None:
    """Callback flavour of ``call_with_retry``: ``callback(error, result)``.

    The callback is invoked exactly once, with ``(None, body)`` on success or
    ``(error, None)`` otherwise. An action that raises is delivered the same
    way, so every orchestrated call ends in one callback.
    """

    try:
        body = await call_with_retry(action, args, get_retry_args, **kwargs)
    except Exception as exc:
        callback(exc, None)
        return
    callback(None, body)


__all__ = [
    "RetryCall",
    "RetryState",
    "call_with_retry",
    "api_call_with_retry",
    "UNAUTHORIZED_STATUS",
]
