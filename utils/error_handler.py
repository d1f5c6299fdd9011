"""
Error Handler
Error reporting and per-context failure counting
"""

import asyncio
import traceback
from typing import Dict, Optional

from utils.logger import get_logger


class ErrorHandler:
    """Logs failures and counts them per context."""

    def __init__(self, max_errors_per_minute: int = 10):
        self.logger = get_logger("ErrorHandler")
        self.error_counts: Dict[str, int] = {}
        self.max_errors_per_minute = max_errors_per_minute
        self._cleanup_task: Optional[asyncio.Task] = None

    def start(self) -> None:
        """Start the periodic error count cleanup on the running loop."""
        if self._cleanup_task is None or self._cleanup_task.done():
            self._cleanup_task = asyncio.create_task(self._periodic_cleanup())
        self.logger.debug("Error handler started")

    def handle_exception(self, error: BaseException, context: str = "") -> bool:
        """
        Handle an exception.

        Args:
            error: The exception that occurred
            context: Optional context string, usually a command name

        Returns:
            True once the per-minute error count for the context reaches
            the threshold
        """
        if context:
            self.logger.error(f"[{context}] {error}")
        else:
            self.logger.error(f"{error}")

        cause = error.__cause__ or error
        self.logger.debug(
            "Traceback:\n" + "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))
        )

        key = context or type(error).__name__
        count = self.error_counts.get(key, 0) + 1
        self.error_counts[key] = count

        if count == self.max_errors_per_minute:
            self.logger.warning(f"{key} failed {count} times within a minute")

        return count >= self.max_errors_per_minute

    async def _periodic_cleanup(self) -> None:
        while True:
            await asyncio.sleep(60)
            self._cleanup_error_counts()

    def _cleanup_error_counts(self) -> None:
        if self.error_counts:
            self.logger.debug("Error counts cleaned up")
        self.error_counts.clear()

    async def shutdown(self) -> None:
        """Stop the cleanup task and forget all counters."""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None

        self.error_counts.clear()
