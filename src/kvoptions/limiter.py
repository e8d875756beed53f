"""
Admission-control capability shared by rate limiters and circuit breakers.

A limiter is consulted before each operation with ``allow()`` and, when the
operation was admitted, told how it went with ``report_result()``. Any object
exposing those two methods satisfies :class:`Limiter`; no base class is needed.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, Protocol, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

_ResultT = TypeVar("_ResultT")


@runtime_checkable
class Limiter(Protocol):
    """Interface of a rate limiter or a circuit breaker."""

    def allow(self) -> Optional[BaseException]:
        """
        Decide whether the next operation may proceed.

        Returns ``None`` when the operation is allowed. A denial is signalled by
        raising, or by returning the exception describing the denial. An allowed
        operation must be followed by exactly one ``report_result`` call.
        """
        ...

    def report_result(self, result: Optional[BaseException]) -> None:
        """Report the outcome of a previously allowed operation (``None`` on success)."""
        ...


class LimiterDeniedError(RuntimeError):
    """Raised when a limiter refuses to admit an operation."""

    def __init__(self, limiter: Limiter, reason: Optional[BaseException] = None):
        message = f"{type(limiter).__name__} denied the operation"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.limiter = limiter
        self.reason = reason


def _admit(limiter: Limiter) -> None:
    try:
        denial = limiter.allow()
    except Exception as exc:
        logger.debug("Limiter %s denied operation: %s", type(limiter).__name__, exc)
        raise LimiterDeniedError(limiter, exc) from exc
    if denial is not None:
        logger.debug("Limiter %s denied operation: %s", type(limiter).__name__, denial)
        raise LimiterDeniedError(limiter, denial) from denial


def call_with_limiter(limiter: Optional[Limiter], operation: Callable[[], _ResultT]) -> _ResultT:
    """
    Run ``operation`` under the limiter contract.

    The operation only runs after ``allow()`` admits it, and its outcome is
    reported exactly once. Exceptions raised by the operation propagate unchanged.

    Raises:
        LimiterDeniedError: When the limiter refuses admission.
    """
    if limiter is None:
        return operation()

    _admit(limiter)
    try:
        result = operation()
    except BaseException as exc:
        limiter.report_result(exc)
        raise
    limiter.report_result(None)
    return result


async def acall_with_limiter(
    limiter: Optional[Limiter], operation: Callable[[], Awaitable[_ResultT]]
) -> _ResultT:
    """Async counterpart of :func:`call_with_limiter`."""
    if limiter is None:
        return await operation()

    _admit(limiter)
    try:
        result = await operation()
    except BaseException as exc:
        limiter.report_result(exc)
        raise
    limiter.report_result(None)
    return result


__all__ = ["Limiter", "LimiterDeniedError", "acall_with_limiter", "call_with_limiter"]
