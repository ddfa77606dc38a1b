"""Scroll service.

Walks the paginated listing of one entity kind page by page and hands the caller one
continuous stream of typed items on a data channel. Every error is reported on a second
error channel; both channels are closed when the scroll ends, whatever the reason.
"""

import asyncio
from typing import Any

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    stop_never,
    wait_exponential,
)

from services.scroll.Channel import Channel
from shared.clients.tracker.TrackerClientInterface import TrackerClientInterface
from shared.clients.tracker.TrackerErrors import ScrollAbortedError, TrackerError
from shared.clients.tracker.models.EntityKind import EntityKind
from shared.clients.tracker.models.PageResponse import PageResponse, get_page_model
from shared.helper.HelperConfig import HelperConfig


def _is_retryable(exception: BaseException) -> bool:
    return isinstance(exception, TrackerError) and not exception.fatal


class Scroll:
    """A running scroll operation: its item and error channels plus the background task.

    Use it as an async context manager to make sure the task is cancelled when the caller
    stops consuming early::

        async with service.scroll(EntityKind.ISSUE) as scroll:
            async for issue in scroll.items:
                ...
    """

    def __init__(self, kind: EntityKind, items: Channel, errors: Channel) -> None:
        self.kind = kind
        self.items = items
        self.errors = errors
        self.task: asyncio.Task | None = None

    def cancel(self) -> None:
        """Stop the scroll at its current suspension point. Both channels get closed."""
        if self.task is not None and not self.task.done():
            self.task.cancel()

    async def wait(self) -> None:
        """Wait until the scroll has ended. Cancellation of the scroll is not re-raised."""
        if self.task is None:
            return
        try:
            await self.task
        except asyncio.CancelledError:
            if not self.task.cancelled():
                raise

    async def collect(self) -> tuple[list[Any], list[TrackerError]]:
        """Drain both channels concurrently until the scroll ends.

        Returns:
            tuple[list, list[TrackerError]]: All items in source order and all reported errors.
        """
        async def drain(channel: Channel) -> list:
            return [value async for value in channel]

        items, errors = await asyncio.gather(drain(self.items), drain(self.errors))
        await self.wait()
        return items, errors

    async def __aenter__(self) -> "Scroll":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cancel()
        await self.wait()


class ScrollService:
    """Runs scroll operations over the listings of a tracker client."""

    def __init__(self, helper_config: HelperConfig, tracker_client: TrackerClientInterface) -> None:
        self.logging = helper_config.get_logger()
        self._client = tracker_client
        self._config = tracker_client.get_config()

    ##########################################
    ################# SCROLL #################
    ##########################################

    def scroll(self, kind: EntityKind) -> Scroll:
        """Start scrolling over all pages of the given entity kind.

        Must be called from a running event loop; the pages are fetched by a background task.

        Args:
            kind (EntityKind): The entity kind to list.

        Returns:
            Scroll: The running scroll with its ``items`` and ``errors`` channels.

        Raises:
            ValueError: If the kind is not supported.
        """
        kind = EntityKind(kind)
        page_model = get_page_model(kind)
        scroll = Scroll(kind, items=Channel(f"{kind.value} items"), errors=Channel(f"{kind.value} errors"))
        scroll.task = asyncio.create_task(self._run(scroll, page_model), name=f"scroll-{kind.value}")
        return scroll

    async def _run(self, scroll: Scroll, page_model: type[PageResponse]) -> None:
        """The fetch, decode, emit loop. Sole producer of both channels."""
        kind = scroll.kind
        page: int | None = None
        fetched_pages = 0
        emitted_items = 0
        self.logging.info("Scrolling %s from %s", kind.value, self._client.get_engine_name())
        try:
            while True:
                response = await self._fetch_page_with_retry(scroll, page, page_model)
                if response is None:
                    break
                fetched_pages += 1

                for item in response.items:
                    await scroll.items.send(item)
                emitted_items += len(response.items)
                self.logging.debug(
                    "Emitted page %d of %s (offset %d, limit %d, total %d)",
                    page or 1, kind.value, response.offset, response.limit, response.total,
                )

                next_page = response.next_page()
                if next_page is None:
                    break
                if next_page <= (page or 1):
                    self.logging.warning(
                        "Pagination of %s does not advance past page %d (offset %d, limit %d, total %d). Stopping.",
                        kind.value, page or 1, response.offset, response.limit, response.total,
                    )
                    break
                page = next_page

            self.logging.info("Finished scrolling %s: %d items from %d pages", kind.value, emitted_items, fetched_pages)
        except asyncio.CancelledError:
            self.logging.info("Scrolling %s cancelled after %d items", kind.value, emitted_items)
            raise
        except Exception as e:
            self.logging.error("Scrolling %s aborted after %d items: %r", kind.value, emitted_items, e)
            error = ScrollAbortedError(f"Scrolling {kind.value} aborted: {e!r}")
            error.__cause__ = e
            await scroll.errors.send(error)
        finally:
            scroll.items.close()
            scroll.errors.close()

    def _get_retrying(self) -> AsyncRetrying:
        attempts = self._config.retry_attempts
        return AsyncRetrying(
            stop=stop_after_attempt(attempts) if attempts else stop_never,
            wait=wait_exponential(multiplier=self._config.retry_backoff, max=self._config.retry_backoff_max),
            retry=retry_if_exception(_is_retryable),
            before_sleep=self._log_retry,
            reraise=True,
        )

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exception = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        self.logging.warning(
            "Attempt %d failed: %s. Retrying the same page in %.2fs.",
            retry_state.attempt_number, exception, delay,
        )

    async def _fetch_page_with_retry(self, scroll: Scroll, page: int | None, page_model: type[PageResponse]) -> PageResponse | None:
        """Fetch one page, retrying transient failures of the same page.

        Every failed attempt is reported on the error channel before anything else happens.

        Returns:
            PageResponse | None: The page, or None if the scroll has to end (fatal error or retries exhausted).
        """
        try:
            async for attempt in self._get_retrying():
                with attempt:
                    return await self._fetch_page_and_report(scroll, page, page_model)
        except TrackerError as e:
            if e.fatal:
                self.logging.error("Fatal error while scrolling %s: %s", scroll.kind.value, e)
            else:
                self.logging.error(
                    "Giving up on page %d of %s after %d attempts: %s",
                    page or 1, scroll.kind.value, self._config.retry_attempts, e,
                )
        return None

    async def _fetch_page_and_report(self, scroll: Scroll, page: int | None, page_model: type[PageResponse]) -> PageResponse:
        try:
            return await self._client.do_fetch_page(scroll.kind, page, page_model)
        except TrackerError as e:
            # report first, the retry policy decides afterwards
            await scroll.errors.send(e)
            raise
