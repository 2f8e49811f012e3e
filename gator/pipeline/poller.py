"""Poll scheduler: fetch the least recently fetched feed on every tick."""

import logging
import time
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from ..errors import GatorError
from ..ingestion import IngestionPipeline, IngestionReport, ParsedDocument, parse_feed
from ..ingestion.pipeline import summarize, utc_now
from ..models import Feed

logger = logging.getLogger(__name__)


class PollState(str, Enum):
    """What the scheduler is doing right now."""

    IDLE = "idle"
    SELECTING = "selecting"
    FETCHING = "fetching"
    INGESTING = "ingesting"


class PollCycle:
    """Record of one select/mark/fetch/parse/ingest iteration."""

    def __init__(self) -> None:
        self.feed: Optional[Feed] = None
        self.report: Optional[IngestionReport] = None
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.failed_state: Optional[PollState] = None

    def start(self) -> None:
        self.start_time = time.time()

    def complete(self) -> None:
        self.end_time = time.time()
        self.success = True

    def fail(self, error: str, state: PollState) -> None:
        self.end_time = time.time()
        self.success = False
        self.error = error
        self.failed_state = state

    @property
    def duration(self) -> float:
        """Get cycle duration in seconds."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def feed_label(self) -> str:
        if self.feed is None:
            return "-"
        return f"'{self.feed.name}' ({self.feed.id})"


class PollScheduler:
    """
    Single-threaded polling loop.

    Each tick selects the feed with the oldest ``last_fetched_at`` (never
    fetched first), marks it fetched before making the request, then fetches,
    parses and ingests it. Errors end the current cycle only; the loop keeps
    going and the next tick picks the next feed.
    """

    def __init__(
        self,
        store,
        fetcher,
        interval: timedelta,
        parser: Callable[[bytes], ParsedDocument] = parse_feed,
        pipeline: Optional[IngestionPipeline] = None,
        clock: Callable[[], datetime] = utc_now,
        sleep: Callable[[float], None] = time.sleep,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            store: provides ``get_next_feed_to_fetch``, ``mark_feed_fetched``
                and ``create_post`` (see ``gator.db.Store``)
            fetcher: provides ``fetch(url) -> bytes``
            interval: time between the start of consecutive cycles
        """
        if interval <= timedelta():
            raise ValueError("Poll interval must be positive")
        self.store = store
        self.fetcher = fetcher
        self.interval = interval
        self.parser = parser
        self.pipeline = pipeline or IngestionPipeline(store, clock=clock)
        self.clock = clock
        self.sleep = sleep
        self.monotonic = monotonic
        self.state = PollState.IDLE

    def run_cycle(self) -> PollCycle:
        """Run one poll cycle. Never raises for a failed feed."""
        cycle = PollCycle()
        cycle.start()

        try:
            self.state = PollState.SELECTING
            feed = self.store.get_next_feed_to_fetch()
            if feed is None:
                logger.info("No feeds to fetch")
                cycle.complete()
                return cycle
            cycle.feed = feed

            # Marked before the request so a feed that hangs or crashes the
            # fetch goes to the back of the queue
            self.store.mark_feed_fetched(feed.id, self.clock())

            self.state = PollState.FETCHING
            logger.debug("Fetching %s from %s", cycle.feed_label, feed.url)
            data = self.fetcher.fetch(feed.url)
            document = self.parser(data)

            self.state = PollState.INGESTING
            cycle.report = self.pipeline.ingest(feed.id, document)
            cycle.complete()
            logger.info("Polled feed %s: %s", cycle.feed_label, summarize(cycle.report))

        except GatorError as e:
            cycle.report = e.report
            cycle.fail(str(e), self.state)
            logger.error(
                "Error polling feed %s while %s: %s",
                cycle.feed_label,
                self.state.value,
                e,
            )
            if e.report is not None:
                logger.info("Partial ingestion for %s: %s", cycle.feed_label, summarize(e.report))
        except Exception as e:
            cycle.fail(f"Unexpected error: {e}", self.state)
            logger.exception(
                "Unexpected error polling feed %s while %s",
                cycle.feed_label,
                self.state.value,
            )
        finally:
            self.state = PollState.IDLE

        return cycle

    def run(self, max_cycles: Optional[int] = None) -> int:
        """
        Run cycles on a fixed-interval tick, the first one immediately.

        Runs forever unless ``max_cycles`` is given.

        Returns:
            Number of cycles run
        """
        interval = self.interval.total_seconds()
        logger.info("Collecting feeds every %s", self.interval)

        cycles = 0
        next_tick = self.monotonic()
        while max_cycles is None or cycles < max_cycles:
            self.run_cycle()
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break

            next_tick += interval
            now = self.monotonic()
            if next_tick > now:
                self.sleep(next_tick - now)
            else:
                # Overran: run again at once and drop the ticks missed
                next_tick += ((now - next_tick) // interval) * interval

        return cycles
