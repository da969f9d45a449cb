"""Discover binding classes declared in documents.

A binding is a root-level class extending `Binding`, or one of the
framework's built-in binding classes. Templates refer to it by name,
e.g. `:class=...` for `ClassBinding`.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..documents import Document, DocumentStore
from ..templates import Template
from .complete_data import CompletionItem, ScriptElementKind, filter_completion_items

logger = logging.getLogger(__name__)

# Built-in binding class name -> name used in templates.
KNOWN_INTERNAL_BINDINGS: Dict[str, str] = {
    "ClassBinding": "class",
    "StyleBinding": "style",
    "RefBinding": "ref",
    "SlotBinding": "slot",
    "TransitionBinding": "transition",
    "HTMLBinding": "html",
}

# Root-level (column 0) class declarations with an optional base class.
ROOT_CLASS_PATTERN = re.compile(
    r'^(?:export\s+)?(?:default\s+)?(?:abstract\s+)?class\s+([A-Za-z_$][\w$]*)'
    r'(?:\s*<[^>{]*>)?(?:\s+extends\s+([A-Za-z_$][\w$.]*))?',
    re.MULTILINE,
)

# `/** ... */` directly before a declaration.
DOC_COMMENT_PATTERN = re.compile(r'/\*\*([^*]*\*+(?:[^/*][^*]*\*+)*)/\s*$')

# `modifiers: 'a' | 'b'` or `modifiers?: ('a' | 'b')[]` in a constructor.
MODIFIERS_PARAM_PATTERN = re.compile(r'\bmodifiers\s*\??\s*:\s*\(?((?:\s*\|?\s*[\'"][^\'"]*[\'"])+)')
STRING_LITERAL_PATTERN = re.compile(r'[\'"]([^\'"]*)[\'"]')


@dataclass
class Binding:
    """A binding class usable in templates."""
    name: str
    class_name: str
    document_name: str
    start: int
    description: str = ""
    modifiers: Optional[List[str]] = field(default=None)


def _doc_comment_before(text: str, offset: int) -> str:
    match = DOC_COMMENT_PATTERN.search(text, 0, offset)
    if match is None:
        return ""
    lines = [line.strip().strip('*').strip() for line in match.group(1).splitlines()]
    return "\n".join(line for line in lines if line)


def _parse_modifiers(class_body: str) -> Optional[List[str]]:
    constructor = class_body.find("constructor")
    if constructor < 0:
        return None
    match = MODIFIERS_PARAM_PATTERN.search(class_body, constructor)
    if match is None:
        return None
    return STRING_LITERAL_PATTERN.findall(match.group(1))


def analyze_bindings(document: Document) -> List[Binding]:
    """Walk the root-level class declarations of a document for bindings."""
    text = document.text
    matches = list(ROOT_CLASS_PATTERN.finditer(text))
    bindings: List[Binding] = []

    for index, match in enumerate(matches):
        class_name, base = match.group(1), match.group(2)
        base_name = base.rsplit('.', 1)[-1] if base else None

        if base_name != "Binding" and class_name not in KNOWN_INTERNAL_BINDINGS:
            continue

        body_end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
        bindings.append(Binding(
            name=KNOWN_INTERNAL_BINDINGS.get(class_name, class_name),
            class_name=class_name,
            document_name=document.name,
            start=match.start(1),
            description=_doc_comment_before(text, match.start()),
            modifiers=_parse_modifiers(text[match.end():body_end]),
        ))

    return bindings


class BindingAnalyzer:
    """Answers binding queries over all documents of a store.

    Bindings are re-analyzed for a document whenever its version changes.
    """

    def __init__(self, documents: DocumentStore):
        self.documents = documents
        # document name -> (version, bindings)
        self._cache: Dict[str, Tuple[int, List[Binding]]] = {}

    def _bindings_of(self, document: Document) -> List[Binding]:
        cached = self._cache.get(document.name)
        if cached is not None and cached[0] == document.version:
            return cached[1]

        bindings = analyze_bindings(document)
        self._cache[document.name] = (document.version, bindings)
        logger.debug("Found %d binding(s) in %s", len(bindings), document.name)
        return bindings

    def all_bindings(self) -> List[Binding]:
        for closed in set(self._cache) - set(self.documents.names()):
            del self._cache[closed]

        bindings: List[Binding] = []
        for name in self.documents.names():
            document = self.documents.get(name)
            if document is not None:
                bindings.extend(self._bindings_of(document))
        return bindings

    def get_bindings_for_completion(self, prefix: Optional[str]) -> List[CompletionItem]:
        items = [
            CompletionItem(name=b.name, description=b.description, kind=ScriptElementKind.CLASS)
            for b in self.all_bindings()
        ]
        return filter_completion_items(items, prefix)

    def get_binding_by_name(self, name: str, template: Optional[Template] = None) -> Optional[Binding]:
        """Find a binding by template name, preferring the template's own document."""
        found = None
        for binding in self.all_bindings():
            if binding.name != name:
                continue
            if template is not None and binding.document_name == template.document_name:
                return binding
            if found is None:
                found = binding
        return found
