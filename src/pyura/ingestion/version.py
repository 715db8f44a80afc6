"""Session-scoped tracking of the announced stream schema version."""

from __future__ import annotations

import logging

from pyura.models import Record, VersionMarker

_logger = logging.getLogger(__name__)


class SchemaResolver:
    """Remember the latest :class:`VersionMarker` seen on one stream session.

    The current version is threaded into every subsequent decode so that
    future schema versions can change field interpretation without touching
    the transport layer.
    """

    def __init__(self) -> None:
        self._current_version: str | None = None

    @property
    def current_version(self) -> str | None:
        return self._current_version

    @property
    def hint(self) -> str | None:
        """Version to pass to the decoder for the next record."""
        return self._current_version

    def reset(self) -> None:
        self._current_version = None

    def observe(self, record: Record | None) -> bool:
        """Consume *record* if it is a version marker.

        Returns ``True`` when the record was a marker and must not be
        forwarded.
        """
        if not isinstance(record, VersionMarker):
            return False
        if record.version != self._current_version:
            _logger.debug("Stream schema version %s -> %s", self._current_version, record.version)
        self._current_version = record.version
        return True
