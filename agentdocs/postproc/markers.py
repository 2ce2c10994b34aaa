"""Namespaced marker blocks for idempotent index injection.

Each documentation set owns one block in the host document::

    <!-- DOCS-AGENTS-MD:react-START -->...index...<!-- DOCS-AGENTS-MD:react-END -->

Any marker inconsistency (missing END, END before START) is repaired by
stripping the offending tokens and appending a clean block.
"""

from __future__ import annotations

from ..logging import get_logger

logger = get_logger("markers")


class MarkerManager:
    """Injects, replaces, and removes namespaced index blocks."""

    START_FMT = "<!-- {prefix}:{key}-START -->"
    END_FMT = "<!-- {prefix}:{key}-END -->"

    def __init__(self, prefix: str = "DOCS-AGENTS-MD") -> None:
        self.prefix = prefix

    def start_marker(self, key: str) -> str:
        return self.START_FMT.format(prefix=self.prefix, key=key)

    def end_marker(self, key: str) -> str:
        return self.END_FMT.format(prefix=self.prefix, key=key)

    def wrap(self, payload: str, key: str) -> str:
        """Wrap payload with the markers for ``key``."""
        return f"{self.start_marker(key)}{payload}{self.end_marker(key)}"

    def has(self, document: str, key: str) -> bool:
        """Return True when the START marker for ``key`` occurs in the document."""
        return self.start_marker(key) in document

    def inject(self, document: str, payload: str, key: str) -> str:
        """Return the document with exactly one up-to-date block for ``key``."""
        start = self.start_marker(key)
        end = self.end_marker(key)
        wrapped = self.wrap(payload, key)

        if start not in document:
            return self._append(document, wrapped)

        start_index = document.index(start)
        end_position = document.find(end)
        if end_position == -1:
            logger.debug("END marker missing for %s; re-appending block", key)
            return self.inject(document.replace(start, "", 1), payload, key)

        end_index = end_position + len(end)
        if end_index <= start_index:
            logger.debug("Markers for %s are out of order; re-appending block", key)
            cleaned = document.replace(start, "", 1).replace(end, "", 1)
            return self.inject(cleaned, payload, key)

        return document[:start_index] + wrapped + document[end_index:]

    def remove(self, document: str, key: str) -> str:
        """Return the document without the block for ``key``."""
        start = self.start_marker(key)
        end = self.end_marker(key)
        if start not in document:
            return document

        start_index = document.index(start)
        end_position = document.find(end)
        if end_position == -1:
            # Text that followed the orphaned START marker is kept.
            return document.replace(start, "", 1)

        end_index = end_position + len(end)
        if end_index <= start_index:
            return document.replace(start, "", 1).replace(end, "", 1)

        # Drop one preceding blank line, never a lone newline owned by earlier content.
        if start_index >= 2 and document[start_index - 2 : start_index] == "\n\n":
            start_index -= 2
        if end_index < len(document) and document[end_index] == "\n":
            end_index += 1

        return document[:start_index] + document[end_index:]

    @staticmethod
    def _append(document: str, wrapped: str) -> str:
        if document == "":
            return f"{wrapped}\n"
        separator = "\n" if document.endswith("\n") else "\n\n"
        return f"{document}{separator}{wrapped}\n"


_DEFAULT_MANAGER = MarkerManager()


def has_existing_index(document: str, key: str) -> bool:
    return _DEFAULT_MANAGER.has(document, key)


def inject_index(document: str, payload: str, key: str) -> str:
    return _DEFAULT_MANAGER.inject(document, payload, key)


def remove_index(document: str, key: str) -> str:
    return _DEFAULT_MANAGER.remove(document, key)


__all__ = ["MarkerManager", "has_existing_index", "inject_index", "remove_index"]
