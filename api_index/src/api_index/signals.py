# --- Lifecycle notifications -------------------------------------------------
import logging
from typing import Protocol

logger = logging.getLogger(__name__)

PHASE_PACKAGES = "packages"
PHASE_CLASSES = "classes"


class SignalSink(Protocol):
    """Where the indexer reports what it is doing. UIs implement this."""

    def warn(self, message: str):
        ...

    def info(self, message: str):
        ...

    def progress(self, total: int, current: int, phase: str):
        ...

    def stop(self, message: str):
        ...


class LoggingSignalSink:
    """Default sink: everything goes to the log."""

    def warn(self, message: str):
        logger.warning(message)

    def info(self, message: str):
        logger.info(message)

    def progress(self, total: int, current: int, phase: str):
        logger.debug("[%s] %d/%d", phase, current, total)

    def stop(self, message: str):
        if message.strip():
            logger.info(message)
