"""Find tagged template literals in document text.

A template is the body of a tagged template literal such as

    render() {
        return html`<div :class=${this.cls}>${this.label}</div>`
    }

The region reported is the text between the backticks. Interpolations
`${...}`, escaped backticks and template literals nested inside
interpolations are part of the enclosing template. An unterminated literal
ends the scan; the templates found before it are still returned.
"""

import logging
import re
from typing import Iterable, List, Optional

from .template import Template

logger = logging.getLogger(__name__)

# Nearest class declaration before a template, used as its owning component.
CLASS_DECLARATION_PATTERN = re.compile(r'\bclass\s+([A-Za-z_$][\w$]*)')


def _skip_quoted(text: str, pos: int) -> Optional[int]:
    """Return the index of the quote closing the string opened at `pos`."""
    quote = text[pos]
    i = pos + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '\\':
            i += 2
            continue
        if ch == quote:
            return i
        if ch == '\n':
            return None
        i += 1
    return None


def find_literal_end(text: str, pos: int) -> Optional[int]:
    """Return the index of the backtick closing a literal whose body starts at `pos`.

    Returns None when the literal is not terminated.
    """
    depth = 0
    i = pos
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '\\':
            i += 2
            continue

        if depth == 0:
            if ch == '`':
                return i
            if ch == '$' and text.startswith('{', i + 1):
                depth = 1
                i += 2
                continue
        else:
            if ch == '{':
                depth += 1
            elif ch == '}':
                depth -= 1
            elif ch == '`':
                close = find_literal_end(text, i + 1)
                if close is None:
                    return None
                i = close
            elif ch == '/' and text.startswith('/', i + 1):
                # Line comment, may hold unbalanced quotes or braces.
                newline = text.find('\n', i)
                i = newline if newline >= 0 else n
                continue
            elif ch == '/' and text.startswith('*', i + 1):
                close = text.find('*/', i + 2)
                if close < 0:
                    return None
                i = close + 2
                continue
            elif ch in ('"', "'"):
                close = _skip_quoted(text, i)
                if close is None:
                    return None
                i = close
        i += 1
    return None


class TaggedTemplateFinder:
    """Locates template literals introduced by one of the configured tags."""

    def __init__(self, tags: Iterable[str] = ("html", "svg", "css")):
        self.tags = tuple(tags)
        if self.tags:
            alternatives = "|".join(re.escape(tag) for tag in self.tags)
            self._pattern: Optional[re.Pattern] = re.compile(
                rf'(?<![\w$.])({alternatives})\s*`'
            )
        else:
            self._pattern = None

    def find(self, document_name: str, text: str) -> List[Template]:
        """Return templates of `text` in ascending order of start offset."""
        templates: List[Template] = []
        if self._pattern is None:
            return templates

        pos = 0
        while True:
            match = self._pattern.search(text, pos)
            if match is None:
                break

            start = match.end()
            end = find_literal_end(text, start)
            if end is None:
                logger.debug(
                    "Unterminated %s template at offset %d in %s",
                    match.group(1), start, document_name
                )
                break

            templates.append(Template(
                document_name=document_name,
                start=start,
                end=end,
                text=text[start:end],
                tag=match.group(1),
                component=self._find_component(text, match.start()),
            ))
            pos = end + 1

        return templates

    def _find_component(self, text: str, before: int) -> Optional[str]:
        name = None
        for match in CLASS_DECLARATION_PATTERN.finditer(text, 0, before):
            name = match.group(1)
        return name
