"""Path Revalidation — marks cached views stale after a successful mutation.

Invariants:
    - version(path) only ever increases
    - revalidate(path) never raises; an unknown path starts at version 0
    - Per-process state: readers compare versions to decide whether to re-fetch

Design Decisions:
    - Version counter over stored payloads: the action layer renders nothing, it only
      signals staleness (ADR: presentation owns the rendered view)
    - Lock-free dict: one event loop per process, revalidate() never awaits
"""

import logging

logger = logging.getLogger(__name__)


class PathRevalidator:
    """In-memory CacheInvalidator keyed by view path."""

    def __init__(self) -> None:
        self._versions: dict[str, int] = {}

    def revalidate(self, path: str) -> None:
        self._versions[path] = self._versions.get(path, 0) + 1
        logger.info(
            f"Revalidated {path}", extra={"path": path},
        )

    def version(self, path: str) -> int:
        return self._versions.get(path, 0)
