import threading
from collections.abc import Callable

from docintake.client.exceptions import PollTimeoutError
from docintake.database.models import DocumentStatus
from docintake.logging.logger import Log

StatusCallback = Callable[[], None]

IN_FLIGHT_STATUSES = frozenset({DocumentStatus.PENDING, DocumentStatus.PROCESSING})


class StatusPoller:
    """Poll loop: read status -> notify on edge -> sleep, until terminal.

    Notifications are edge-triggered: ``on_completed`` and ``on_failed`` fire
    once when the observed status changes into that state, never again for
    repeated reads of it. Stopping the poller only stops reading; it has no
    effect on server-side processing.
    """

    def __init__(
        self,
        fetch_status: Callable[[], DocumentStatus | str],
        *,
        interval_seconds: float = 2.0,
        on_completed: StatusCallback | None = None,
        on_failed: StatusCallback | None = None,
        max_polls: int | None = None,
    ) -> None:
        self._fetch_status = fetch_status
        self._interval_seconds = interval_seconds
        self._on_completed = on_completed
        self._on_failed = on_failed
        self._max_polls = max_polls
        self._stop_event = threading.Event()
        self._last_status: DocumentStatus | None = None
        self.polls = 0

    @property
    def status(self) -> DocumentStatus | None:
        return self._last_status

    @property
    def is_processing(self) -> bool:
        return self._last_status is None or self._last_status in IN_FLIGHT_STATUSES

    @property
    def is_completed(self) -> bool:
        return self._last_status is DocumentStatus.COMPLETED

    @property
    def is_failed(self) -> bool:
        return self._last_status is DocumentStatus.FAILED

    def observe(self, status: DocumentStatus | str) -> DocumentStatus:
        """Record one status read and fire the notification for an edge."""
        current = DocumentStatus(status)
        previous, self._last_status = self._last_status, current
        if current == previous:
            return current
        if current is DocumentStatus.COMPLETED and self._on_completed is not None:
            self._on_completed()
        elif current is DocumentStatus.FAILED and self._on_failed is not None:
            self._on_failed()
        return current

    def run(self) -> DocumentStatus | None:
        """Poll until a terminal status is read or the poller is stopped.

        Returns the last observed status, which is terminal unless stop() was
        called first. A stop() issued before run() is honored; call reset()
        to poll again after stopping.

        Raises:
            PollTimeoutError: if max_polls reads pass without a terminal status.
        """
        while not self._stop_event.is_set():
            status = self.observe(self._fetch_status())
            self.polls += 1
            if status.is_terminal:
                return status
            if self._max_polls is not None and self.polls >= self._max_polls:
                raise PollTimeoutError(
                    f"Status still {status.value} after {self.polls} polls"
                )
            Log.debug(f"Status {status.value}, polling again in {self._interval_seconds}s")
            self._stop_event.wait(self._interval_seconds)
        Log.info("Status polling stopped before a terminal status")
        return self._last_status

    def stop(self) -> None:
        self._stop_event.set()

    def reset(self) -> None:
        """Re-arm a stopped poller so run() can be called again."""
        self._stop_event.clear()
