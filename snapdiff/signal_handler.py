"""Process signal fan-out.

Turns SIGHUP, SIGINT and SIGTERM into INTERRUPT events. A second signal
before ``reset`` raises KeyboardInterrupt.
"""

import signal
import threading

from .emitter import EventEmitter
from .events import Events

HANDLED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGHUP", "SIGINT", "SIGTERM")
    if hasattr(signal, name)
)


class SignalHandler(EventEmitter):
    """Emits INTERRUPT with ``{"exit_code": 128 + signum}``."""

    def __init__(self):
        super().__init__()
        self._installed = False
        self._interrupted = False

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self) -> None:
        """Install handlers for the process. Calling it again does nothing.

        Signal handlers can only be set from the main thread; elsewhere this
        is a no-op.
        """
        if self._installed or threading.current_thread() is not threading.main_thread():
            return
        for signum in HANDLED_SIGNALS:
            signal.signal(signum, self.handle)
        self._installed = True

    def handle(self, signum, frame=None) -> None:
        if self._interrupted:
            raise KeyboardInterrupt
        self._interrupted = True
        self.emit(Events.INTERRUPT, {"exit_code": 128 + signum})

    def reset(self) -> None:
        """Forward the next signal as INTERRUPT again."""
        self._interrupted = False


signal_handler = SignalHandler()
