"""
Polling driver for MoodTrace.

Pulls the currently playing track at a fixed interval and feeds new samples
into a MoodSession. Polls run one at a time on a single event loop, and
nothing is queued while the poller is suspended, so resuming applies only
the freshest poll.
"""
import asyncio
from typing import Optional
from ..data.schemas import SessionEntry
from ..engine.session import MoodSession
from ..utils.logging import StructuredLogger
from .source import IngestionError, PlaybackResult, PlaybackSource, SourceDisconnectedError
from .tracker import PlaybackTracker


class SamplePoller:
    """Periodic bridge between a PlaybackSource and a MoodSession."""

    def __init__(self, source: PlaybackSource, session: MoodSession,
                 tracker: Optional[PlaybackTracker] = None,
                 interval_seconds: Optional[float] = None,
                 reset_on_disconnect: Optional[bool] = None,
                 logger: Optional[StructuredLogger] = None):
        polling = session.config.polling
        self.source = source
        self.session = session
        self.tracker = tracker or PlaybackTracker(
            submit_placeholders=polling.submit_placeholders
        )
        self.interval_seconds = (
            polling.interval_seconds if interval_seconds is None else interval_seconds
        )
        self.reset_on_disconnect = (
            polling.reset_on_disconnect if reset_on_disconnect is None else reset_on_disconnect
        )
        self.logger = logger or session.logger
        self._suspended = False
        self._stopped = False
        self._stop_event = asyncio.Event()

    @property
    def suspended(self) -> bool:
        return self._suspended

    @property
    def stopped(self) -> bool:
        return self._stopped

    def poll_once(self) -> Optional[SessionEntry]:
        """Fetch once and submit the result if it is a new sample.

        Returns:
            The appended SessionEntry, or None when this cycle yields no sample
        """
        if self._stopped or self._suspended:
            return None
        try:
            result = self.source.fetch()
        except IngestionError as e:
            self._handle_source_error(e)
            return None
        return self._submit(result)

    async def poll_once_async(self) -> Optional[SessionEntry]:
        """Like poll_once, but the fetch runs in a worker thread.

        Only the fetch leaves the event loop; tracking and the session
        update still happen on it.
        """
        if self._stopped or self._suspended:
            return None
        try:
            result = await asyncio.to_thread(self.source.fetch)
        except IngestionError as e:
            self._handle_source_error(e)
            return None
        return self._submit(result)

    def _submit(self, result: Optional[PlaybackResult]) -> Optional[SessionEntry]:
        # A fetch that completes after stop() is discarded.
        if self._stopped:
            return None
        observed = self.tracker.observe(result)
        if observed is None:
            return None
        sample, label = observed
        return self.session.submit_sample(sample, label)

    def _handle_source_error(self, error: IngestionError) -> None:
        if isinstance(error, SourceDisconnectedError):
            self._handle_disconnect(error)
        else:
            self.logger.warning("Playback source unavailable, skipping cycle", error=str(error))

    def _handle_disconnect(self, error: SourceDisconnectedError) -> None:
        self.logger.warning(
            "Playback source disconnected, suspending",
            error=str(error),
            reset_history=self.reset_on_disconnect
        )
        self._suspended = True
        self.tracker.forget()
        if self.reset_on_disconnect:
            self.session.reset()

    def suspend(self) -> None:
        self._suspended = True

    def resume(self) -> None:
        """Resume polling; the next fetch reflects what is playing now."""
        self._suspended = False

    def stop(self) -> None:
        """Stop for good: no further samples are submitted.

        Call from the event loop thread.
        """
        self._stopped = True
        self._stop_event.set()

    async def run(self) -> None:
        """Poll every interval until stop() is called.

        A failing poll is logged and the next one runs on schedule.
        """
        with self.logger.operation_context(
            "SamplePoller", "run", interval_seconds=self.interval_seconds
        ) as log:
            while not self._stopped:
                try:
                    await self.poll_once_async()
                except Exception as e:
                    log.error(
                        "Poll failed, continuing",
                        exc_info=True,
                        error_type=type(e).__name__,
                        error_message=str(e)
                    )
                try:
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
                except asyncio.TimeoutError:
                    continue
