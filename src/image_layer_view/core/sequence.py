"""Request sequencing to drop responses of abandoned queries."""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestSequence:
    """Issues monotonically increasing request tokens.

    Only the response belonging to the most recently issued token is
    current; anything older arrived for a query the user has moved on from.
    """

    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        """Start a new request and return its token."""
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    async def run(self, factory: Callable[[], Awaitable[T]]) -> T | None:
        """Await a request and return its result only if it is still current.

        Args:
            factory: Callable returning the awaitable to run

        Returns:
            The result, or None if a newer request was issued meanwhile

        Raises:
            Exception: Whatever the request raised, unless it is stale
        """
        token = self.issue()
        try:
            result = await factory()
        except Exception as e:
            if self.is_current(token):
                raise
            logger.debug(
                "Discarding stale failure for request %d (latest %d): %s",
                token,
                self._latest,
                e,
            )
            return None

        if not self.is_current(token):
            logger.debug(
                "Discarding stale response for request %d (latest %d)",
                token,
                self._latest,
            )
            return None
        return result
