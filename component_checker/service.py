"""Service layer for Component Checker."""

import asyncio
from typing import Callable, Optional, Sequence, Union

from .abort import AbortToken
from .cache import UpdateCache
from .constants import MAX_CONCURRENT_CHECKS
from .errors import Cancelled
from .logging_config import get_logger
from .models import CheckReport, ComponentId, Metadata
from .sources import SourceRegistry

logger = get_logger(__name__)

Reporter = Callable[[CheckReport], None]
ProgressCallback = Callable[[CheckReport, int, int], None]


def log_report(report: CheckReport) -> None:
    """Default reporter: log a failed check."""
    logger.error("Check for updates failed for %s: %s", report.name, report.error)


class UpdateService:
    """Runs update checks for registered sources.

    This service provides a high-level API for:
    - Running a single check and storing the result in the cache
    - Turning failures into reports instead of exceptions
    - Batch checking with concurrency control
    """

    def __init__(
        self,
        registry: SourceRegistry,
        cache: Optional[UpdateCache] = None,
        reporter: Optional[Reporter] = log_report,
        max_concurrent: int = MAX_CONCURRENT_CHECKS,
    ) -> None:
        """Initialize the update service.

        Args:
            registry: Sources to check.
            cache: Optional cache that receives every successful result.
            reporter: Called with each failed report; None to disable.
            max_concurrent: Maximum number of concurrent update checks.
        """
        self.registry = registry
        self.cache = cache
        self._reporter = reporter
        self._max_concurrent = max_concurrent

    async def run_check(
        self,
        source_id: Union[ComponentId, str],
        abort: Optional[AbortToken] = None,
    ) -> Optional[Metadata]:
        """Check one component and cache the result.

        Returns:
            The fetched Metadata, or None if no acceptable release exists.

        Raises:
            UnknownSource: If no source is registered for ``source_id``.
            Unsupported: If the source cannot check actively.
            UpdateCheckError: If the fetch fails.
            Cancelled: If ``abort`` fires.
        """
        source = self.registry.get(source_id)
        request = source.create_request()

        logger.debug("Checking %s via %s", source.identifier, type(request).__name__)
        info = await request.run(abort)
        if info is None:
            return None

        if self.cache is not None:
            self.cache.set_info(source.identifier, info)
        logger.debug("Fetched version %s for %s", info.version, source.identifier)
        return info

    async def check(
        self,
        source_id: Union[ComponentId, str],
        abort: Optional[AbortToken] = None,
    ) -> CheckReport:
        """Check one component, reporting failures instead of raising them.

        Cancellation still propagates.
        """
        source = self.registry.find(source_id)
        report = CheckReport(source_id=source.identifier if source is not None else source_id)  # type: ignore[arg-type]

        try:
            if source is not None:
                report.current = source.current_info()
            report.info = await self.run_check(source_id, abort)
            if report.info is not None and source is not None:
                report.newer = source.is_newer(report.info)
        except Cancelled:
            raise
        except Exception as e:
            report.error = str(e) or type(e).__name__
            report.error_kind = type(e).__name__
            if self._reporter is not None:
                self._reporter(report)

        return report

    async def check_all(
        self,
        source_ids: Optional[Sequence[Union[ComponentId, str]]] = None,
        abort: Optional[AbortToken] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> list[CheckReport]:
        """Check several components concurrently.

        Args:
            source_ids: Components to check. If None, all registered sources.
            abort: Optional token that stops the whole batch.
            progress_callback: Optional callback(report, done, total).

        Returns:
            Reports in the order of ``source_ids``.
        """
        if source_ids is None:
            source_ids = self.registry.identifiers()

        total = len(source_ids)
        done = 0
        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def check_with_progress(source_id: Union[ComponentId, str]) -> CheckReport:
            nonlocal done
            async with semaphore:
                if abort is not None:
                    abort.check()
                report = await self.check(source_id, abort)

            done += 1
            if progress_callback:
                progress_callback(report, done, total)
            return report

        tasks = [asyncio.ensure_future(check_with_progress(sid)) for sid in source_ids]
        if not tasks:
            return []

        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
