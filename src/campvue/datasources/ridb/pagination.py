"""
Offset/limit pagination over RIDB list endpoints.

``PageAggregator`` drives a page fetcher one page at a time and decides when
to stop. Stop conditions, in precedence order:

1. the page is empty (always ends the loop, whatever the total count says);
2. the collected count reached the reported ``TOTAL_COUNT``;
3. the page was shorter than the page size (last page, even without a count);
4. ``max_pages`` was exhausted (silent truncation, logged as a warning).

A page holding exactly ``page_size`` records is ambiguous, so without a total
count one more request is made to confirm the end.

Any fetch failure is fatal: the exception propagates and everything collected
so far is discarded.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

from campvue.datasources.ridb.errors import InvalidParameter

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")

MAX_PAGE_SIZE = 50  # RIDB max page size


# =============================================================================
# Data Model
# =============================================================================


@dataclass
class Page(Generic[RecordT]):
    """One fetched slice of records, in remote order."""

    items: list[RecordT]
    total_count: int | None = None

    @property
    def returned_count(self) -> int:
        return len(self.items)


#: ``fetch(limit, offset) -> Page``
PageFetcher = Callable[[int, int], Page[RecordT]]


@dataclass(frozen=True)
class StopPolicy:
    """Which optional stop rules apply. Empty pages and ``max_pages`` always stop."""

    use_total_count: bool = True
    stop_on_short_page: bool = True


class Phase(StrEnum):
    FETCHING = "fetching"
    EVALUATING = "evaluating"
    DONE = "done"
    FAILED = "failed"


class StopReason(StrEnum):
    EMPTY_PAGE = "empty_page"
    TOTAL_REACHED = "total_reached"
    SHORT_PAGE = "short_page"
    MAX_PAGES = "max_pages"


@dataclass
class AggregationState(Generic[RecordT]):
    """Mutable progress of a single aggregation call."""

    offset: int
    collected: list[RecordT] = field(default_factory=list)
    pages_fetched: int = 0
    known_total: int | None = None
    phase: Phase = Phase.FETCHING
    stop_reason: StopReason | None = None

    @property
    def truncated(self) -> bool:
        """True when the page bound ended the loop before the data did."""
        return self.stop_reason is StopReason.MAX_PAGES


# =============================================================================
# Aggregator
# =============================================================================


def require_int(name: str, value: object, minimum: int, maximum: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"Invalid '{name}': must be an integer."
        raise InvalidParameter(msg)
    if value < minimum or (maximum is not None and value > maximum):
        bound = f"between {minimum} and {maximum}" if maximum is not None else f">= {minimum}"
        msg = f"Invalid '{name}': must be an integer {bound}."
        raise InvalidParameter(msg)
    return value


class PageAggregator(Generic[RecordT]):
    """Collects records from successive pages until a stop condition holds.

    One instance serves one aggregation; ``state`` stays readable after
    ``run()`` returns so callers can inspect ``pages_fetched`` or
    ``truncated``.
    """

    def __init__(
        self,
        fetch: PageFetcher[RecordT],
        *,
        page_size: int = MAX_PAGE_SIZE,
        start_offset: int = 0,
        max_pages: int = 10,
        stop_policy: StopPolicy | None = None,
    ) -> None:
        self.fetch = fetch
        self.page_size = require_int("page_size", page_size, 1, MAX_PAGE_SIZE)
        self.max_pages = require_int("max_pages", max_pages, 1)
        self.stop_policy = stop_policy or StopPolicy()
        self.state: AggregationState[RecordT] = AggregationState(
            offset=require_int("start_offset", start_offset, 0)
        )

    def run(self) -> list[RecordT]:
        """Drive the state machine to completion and return the records."""
        if self.state.phase is not Phase.FETCHING or self.state.pages_fetched:
            msg = "PageAggregator instances are single-use"
            raise RuntimeError(msg)

        while self.state.phase is Phase.FETCHING:
            page = self._fetch()
            if page is not None:
                self._evaluate(page)

        return self.state.collected

    def _fetch(self) -> Page[RecordT] | None:
        """Fetch the next page, or return ``None`` once the page cap is hit."""
        state = self.state
        if state.pages_fetched >= self.max_pages:
            self._finish(StopReason.MAX_PAGES)
            logger.warning(
                "Stopped after max_pages=%d with %d records (offset %d); result may be incomplete",
                self.max_pages,
                len(state.collected),
                state.offset,
            )
            return None

        try:
            page = self.fetch(self.page_size, state.offset)
        except Exception:
            state.phase = Phase.FAILED
            state.collected = []
            raise

        state.pages_fetched += 1
        state.phase = Phase.EVALUATING
        logger.debug(
            "Page %d at offset %d: %d records (total=%s)",
            state.pages_fetched,
            state.offset,
            page.returned_count,
            page.total_count,
        )
        return page

    def _evaluate(self, page: Page[RecordT]) -> None:
        state = self.state
        if not page.items:
            self._finish(StopReason.EMPTY_PAGE)
            return

        state.collected.extend(page.items)
        if page.total_count is not None:
            state.known_total = page.total_count

        policy = self.stop_policy
        if (
            policy.use_total_count
            and state.known_total is not None
            and len(state.collected) >= state.known_total
        ):
            self._finish(StopReason.TOTAL_REACHED)
            return
        if policy.stop_on_short_page and page.returned_count < self.page_size:
            self._finish(StopReason.SHORT_PAGE)
            return

        state.offset += self.page_size
        state.phase = Phase.FETCHING

    def _finish(self, reason: StopReason) -> None:
        self.state.phase = Phase.DONE
        self.state.stop_reason = reason


def paginate(
    fetch: PageFetcher[RecordT],
    *,
    page_size: int = MAX_PAGE_SIZE,
    start_offset: int = 0,
    max_pages: int = 10,
    stop_policy: StopPolicy | None = None,
) -> list[RecordT]:
    """Fetch pages until a stop condition holds and return all records in order."""
    aggregator = PageAggregator(
        fetch,
        page_size=page_size,
        start_offset=start_offset,
        max_pages=max_pages,
        stop_policy=stop_policy,
    )
    return aggregator.run()
