#!/usr/bin/env python3
"""
Signal handler for interrupt-driven cancellation.

A background listener owns the path of the in-flight temporary artifact. The
main flow and the signal handler talk to it only through a queue, so the
listener always sees the latest recorded path before it handles an interrupt.
"""

import os
import queue
import signal
import threading
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

__version__ = "0.1.0"
__author__ = "John Ayers"

INTERRUPT_EXIT_CODE = 1
FINISH_TIMEOUT = 5.0


def file_info() -> dict[str, str]:
    """Return metadata about this module.

    Returns:
        Dictionary containing module metadata
    """
    return {
        "name": "signal_handler",
        "description": "Signal handler for interrupt-driven cancellation",
        "version": __version__,
        "author": __author__,
        "last_updated": "2026-10-19",
    }


class CancellationEvent(Enum):
    """Messages consumed by the cancellation listener."""

    ARTIFACT_RECORDED = "artifact_recorded"
    ARTIFACT_RELEASED = "artifact_released"
    INTERRUPTED = "interrupted"
    STOP = "stop"


def _remove_quietly(path: str) -> None:
    # Runs on the listener thread: no logging or stdio, whose locks the
    # interrupted main thread may be holding
    try:
        Path(path).unlink(missing_ok=True)
    except OSError:
        pass


class CancellationCoordinator:
    """Removes the temporary artifact and exits on SIGINT/SIGTERM."""

    HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)

    def __init__(
        self,
        terminate: Callable[[int], None] = os._exit,
        finish_timeout: float = FINISH_TIMEOUT,
    ) -> None:
        """Initialize the cancellation coordinator.

        Args:
            terminate: Called with the exit code once cleanup is done
            finish_timeout: Seconds the interrupted main thread waits for the
                listener before terminating on its own
        """
        self._terminate = terminate
        self._finish_timeout = finish_timeout
        # SimpleQueue.put is reentrant and safe to call from a signal handler
        self._events: queue.SimpleQueue = queue.SimpleQueue()
        self._interrupted = threading.Event()
        self._finished = threading.Event()
        self._listener: Optional[threading.Thread] = None
        self._original_handlers: dict[int, object] = {}

    def is_cancelled(self) -> bool:
        """Check if an interrupt has been received.

        Returns:
            True once the first interrupt arrived
        """
        return self._interrupted.is_set()

    def record_artifact(self, path: str) -> None:
        """Mark a temporary artifact for removal if an interrupt arrives.

        Args:
            path: Temporary artifact path
        """
        self._events.put((CancellationEvent.ARTIFACT_RECORDED, path))

    def release_artifact(self) -> None:
        """Forget the recorded artifact once the main flow has removed it."""
        self._events.put((CancellationEvent.ARTIFACT_RELEASED, None))

    def arm(self) -> None:
        """Start the listener and install SIGINT/SIGTERM handlers."""
        if self._listener is None:
            self._listener = threading.Thread(
                target=self._listen, name="cancellation-listener", daemon=True
            )
            self._listener.start()

        for signum in self.HANDLED_SIGNALS:
            self._original_handlers[signum] = signal.signal(signum, self._signal_handler)

    def disarm(self) -> None:
        """Restore original handlers and stop the listener."""
        for signum, handler in self._original_handlers.items():
            signal.signal(signum, handler)
        self._original_handlers.clear()

        if self._listener is not None and not self._interrupted.is_set():
            self._events.put((CancellationEvent.STOP, None))
            self._listener.join(timeout=5)
            self._listener = None

    def _signal_handler(self, signum: int, frame) -> None:
        """Handle SIGINT and SIGTERM signals.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        # First interrupt wins; the process is already exiting after that
        if self._interrupted.is_set():
            return
        self._interrupted.set()

        self._events.put((CancellationEvent.INTERRUPTED, signum))

        # Hold the main flow here until the listener has terminated the process
        if not self._finished.wait(timeout=self._finish_timeout):
            self._terminate(INTERRUPT_EXIT_CODE)

    def _listen(self) -> None:
        artifact: Optional[str] = None

        while True:
            event, payload = self._events.get()

            if event is CancellationEvent.ARTIFACT_RECORDED:
                artifact = payload
            elif event is CancellationEvent.ARTIFACT_RELEASED:
                artifact = None
            elif event is CancellationEvent.STOP:
                return
            elif event is CancellationEvent.INTERRUPTED:
                if artifact is not None:
                    _remove_quietly(artifact)
                try:
                    self._terminate(INTERRUPT_EXIT_CODE)
                finally:
                    self._finished.set()
                return


if __name__ == "__main__":
    # Example usage
    info = file_info()
    print(f"{info['name']} v{info['version']}")
