"""Error taxonomy for the weather overlay.

None of these escape to the host: cache errors are recovered inside the
cache, fetch errors inside the orchestrator, and composition preconditions
are reported as defects and ignored.
"""

import logging

logger = logging.getLogger(__name__)


class OverlayError(Exception):
    """Base class for weather overlay errors."""


class CacheReadError(OverlayError):
    """Cached record missing, unreadable, stale or undecodable."""


class CacheWriteError(OverlayError):
    """Cached record could not be encoded or written."""


class FetchError(OverlayError):
    """A fetch collaborator failed (network, HTTP status or payload)."""


class CompositionPreconditionError(OverlayError):
    """Composition was requested without the records the mode requires."""


def report_defect(message: str, *args, exc_info=None) -> None:
    """Log a should-never-happen state on the error channel."""
    logger.error("Defect: " + message, *args, exc_info=exc_info)
