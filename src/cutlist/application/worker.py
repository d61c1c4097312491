"""Background worker pool for cut list generation.

Packing large projects can take noticeable time, so generation is run on
a thread pool and callers either wait with a timeout or await the result
from async code.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Sequence

from cutlist.domain import CutList, CutListSettings, Part, Stock, ValidationIssue
from cutlist.infrastructure import generate_cut_list

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class CutListTimeoutError(Exception):
    """Raised when cut list generation does not finish within the timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Cut list generation timed out after {timeout:g} seconds")


class CutListWorker:
    """Runs cut list generation on a thread pool.

    Each job works on its own immutable inputs, so jobs never share state.

    Example:
        >>> with CutListWorker(max_workers=2) as worker:
        ...     cut_list = worker.generate(parts, stocks, timeout=10)
    """

    def __init__(self, max_workers: int = 2) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="cutlist"
        )

    def submit(
        self,
        parts: Sequence[Part],
        stocks: Sequence[Stock],
        settings: CutListSettings | None = None,
        project_modified_at: str | None = None,
        bypassed_issues: Sequence[ValidationIssue] = (),
    ) -> Future[CutList]:
        """Queue a generation job and return its future."""
        logger.debug("Submitting cut list job: %d parts, %d stocks", len(parts), len(stocks))
        return self._executor.submit(
            generate_cut_list,
            tuple(parts),
            tuple(stocks),
            settings,
            project_modified_at,
            tuple(bypassed_issues),
        )

    def generate(
        self,
        parts: Sequence[Part],
        stocks: Sequence[Stock],
        settings: CutListSettings | None = None,
        project_modified_at: str | None = None,
        bypassed_issues: Sequence[ValidationIssue] = (),
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> CutList:
        """Generate a cut list on the pool and wait for it.

        Raises:
            CutListTimeoutError: If the job does not finish within timeout seconds.
        """
        future = self.submit(parts, stocks, settings, project_modified_at, bypassed_issues)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError:
            future.cancel()
            logger.warning("Cut list generation timed out after %.1fs", timeout)
            raise CutListTimeoutError(timeout) from None

    async def generate_async(
        self,
        parts: Sequence[Part],
        stocks: Sequence[Stock],
        settings: CutListSettings | None = None,
        project_modified_at: str | None = None,
        bypassed_issues: Sequence[ValidationIssue] = (),
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> CutList:
        """Async variant of generate() for use from an event loop.

        Raises:
            CutListTimeoutError: If the job does not finish within timeout seconds.
        """
        future = self.submit(parts, stocks, settings, project_modified_at, bypassed_issues)
        try:
            return await asyncio.wait_for(asyncio.wrap_future(future), timeout=timeout)
        except asyncio.TimeoutError:
            future.cancel()
            logger.warning("Cut list generation timed out after %.1fs", timeout)
            raise CutListTimeoutError(timeout) from None

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting jobs and release the pool threads."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "CutListWorker":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()
