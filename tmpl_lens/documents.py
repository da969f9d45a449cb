"""Document model: source files as known to the host service."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class Document:
    """A source file with mutable text and a monotonically increasing version."""
    name: str
    text: str
    version: int = 1


class DocumentStore:
    """Holds open documents keyed by name.

    Every text change bumps the document version, which is what the
    template locator uses to invalidate its cache.
    """

    def __init__(self):
        self._documents: Dict[str, Document] = {}
        # Last version handed out per name, kept across close() so a reopened
        # document never reuses a version seen before.
        self._versions: Dict[str, int] = {}

    def open(self, name: str, text: str) -> Document:
        """Open a document, or replace its text if already open."""
        existing = self._documents.get(name)
        if existing is not None:
            return self.update(name, text)

        document = Document(name=name, text=text, version=self._next_version(name))
        self._documents[name] = document
        logger.debug("Opened document %s", name)
        return document

    def update(self, name: str, text: str) -> Document:
        """Replace the text of an open document.

        Raises:
            KeyError: If the document is not open.
        """
        document = self._documents.get(name)
        if document is None:
            raise KeyError(f"Document '{name}' is not open")

        document.text = text
        document.version = self._next_version(name)
        logger.debug("Updated document %s to version %d", name, document.version)
        return document

    def _next_version(self, name: str) -> int:
        version = self._versions.get(name, 0) + 1
        self._versions[name] = version
        return version

    def close(self, name: str) -> None:
        if self._documents.pop(name, None) is not None:
            logger.debug("Closed document %s", name)

    def get(self, name: str) -> Optional[Document]:
        return self._documents.get(name)

    def names(self) -> List[str]:
        return list(self._documents.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._documents
