"""Template locator: finds the templates of a document.

Located templates are cached per document version. A document whose
version changed since the last lookup is scanned again, so callers always
see templates matching the current text.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..documents import DocumentStore
from .finder import TaggedTemplateFinder
from .template import Template

logger = logging.getLogger(__name__)


class TemplateLocator:
    """Finds Template instances in documents of a DocumentStore.

    Lookups never raise: unknown documents and malformed template text
    yield None or an empty list.
    """

    def __init__(
        self,
        documents: DocumentStore,
        finder: Optional[TaggedTemplateFinder] = None,
        cache: bool = True,
    ):
        self.documents = documents
        self.finder = finder or TaggedTemplateFinder()
        self._cache_enabled = cache
        # document name -> (version, templates)
        self._cache: Dict[str, Tuple[int, List[Template]]] = {}

    def find_all_templates(self, document_name: str) -> List[Template]:
        """All templates of a document, ascending by start offset."""
        document = self.documents.get(document_name)
        if document is None:
            self._cache.pop(document_name, None)
            return []

        if self._cache_enabled:
            cached = self._cache.get(document_name)
            if cached is not None and cached[0] == document.version:
                return list(cached[1])

        templates = self.finder.find(document.name, document.text)
        logger.debug(
            "Located %d template(s) in %s at version %d",
            len(templates), document.name, document.version
        )

        if self._cache_enabled:
            self._cache[document_name] = (document.version, templates)

        return list(templates)

    def find_template_at(self, document_name: str, offset: int) -> Optional[Template]:
        """The template whose [start, end) contains the global offset, if any."""
        for template in self.find_all_templates(document_name):
            if template.start > offset:
                break
            if template.contains(offset):
                return template
        return None

    def invalidate(self, document_name: Optional[str] = None) -> None:
        """Drop cached templates for one document, or for all of them."""
        if document_name is None:
            self._cache.clear()
        else:
            self._cache.pop(document_name, None)
