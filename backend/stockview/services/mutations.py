"""Run a write, invalidate the collections it touches, report the outcome."""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

from fastapi import HTTPException, status

from stockview.services.collections import CollectionCache, QueryKey

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Notification:
    level: str  # "success" or "error"
    message: str


@dataclass
class MutationResult(Generic[T]):
    ok: bool
    notification: Notification
    data: T | None = None
    error: Exception | None = None

    def raise_for_error(self) -> None:
        """Turn a failed mutation into the HTTP error the client sees."""
        if self.ok:
            return
        if isinstance(self.error, HTTPException):
            raise self.error
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=self.notification.message,
        )


async def run_mutation(
    cache: CollectionCache,
    action: Callable[[], Awaitable[T]],
    *,
    invalidates: tuple[QueryKey, ...],
    success_message: str,
    error_message: str,
    db: Any = None,
) -> MutationResult[T]:
    """Await ``action``; on success invalidate ``invalidates``.

    On failure the session (when given) is rolled back, the error is logged,
    and nothing is invalidated since nothing changed.
    """
    try:
        data = await action()
    except Exception as e:
        if db is not None:
            await db.rollback()
        if isinstance(e, HTTPException):
            logger.warning(f"{error_message}: {e.detail}")
        else:
            logger.error(f"{error_message}: {e}")
        return MutationResult(ok=False, notification=Notification("error", error_message), error=e)

    cache.invalidate(*invalidates)
    logger.info(success_message)
    return MutationResult(ok=True, notification=Notification("success", success_message), data=data)
