"""Template-aware service built on the completion provider.

Only completion related hooks and the supported fix codes are implemented;
the decoration layer leaves every other host operation untouched.
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple, Union

from ..templates import Template
from ..types import CompletionEntryDetails, CompletionInfo, QuickInfo, TextSpan
from .complete_data import CompletionItem, find_fully_matched_completion_item, get_script_element_kind
from .completion import TemplateAnalyzer, TemplateCompletion
from .parts import TAG_PART_TYPES, TemplatePart, TemplatePartLocation, TemplatePartLocationType

logger = logging.getLogger(__name__)

# (template, local offset) -> part under the offset and where inside it, or None.
PartResolver = Callable[[Template, int], Optional[Tuple[TemplatePart, TemplatePartLocation]]]


def current_word(part: TemplatePart, location: TemplatePartLocation) -> str:
    """The word a location points at, as written in the template."""
    if part.type in TAG_PART_TYPES:
        return part.tag_name
    if location.type is TemplatePartLocationType.MODIFIER:
        index = location.modifier_index or 0
        return part.modifiers[index] if index < len(part.modifiers) else ""
    if location.type is TemplatePartLocationType.ATTR_VALUE:
        return part.attr.value if part.attr and part.attr.value else ""
    return part.main_name or ""


class TemplateService:
    """Answers completion, completion details and quick info inside templates."""

    def __init__(
        self,
        analyzer: TemplateAnalyzer,
        part_resolver: PartResolver,
        fix_codes: Iterable[Union[str, int]] = (),
    ):
        self.analyzer = analyzer
        self.completion = TemplateCompletion(analyzer)
        self._part_resolver = part_resolver
        self._fix_codes: List[Union[str, int]] = list(fix_codes)

    def _resolve(self, template: Template, offset: int) -> Optional[Tuple[TemplatePart, TemplatePartLocation]]:
        resolved = self._part_resolver(template, offset)
        if resolved is None:
            logger.debug("No template part at %d in template at %d", offset, template.start)
        return resolved

    def get_completions_at_position(
        self, template: Template, offset: int, options=None
    ) -> Optional[CompletionInfo]:
        resolved = self._resolve(template, offset)
        if resolved is None:
            return None

        part, location = resolved
        return self.completion.get_completions(part, location, template)

    def get_completion_entry_details(
        self, template: Template, offset: int, name: str, *args
    ) -> Optional[CompletionEntryDetails]:
        resolved = self._resolve(template, offset)
        if resolved is None:
            return None

        part, location = resolved
        item = self._find_item(part, location, template, name)
        if item is None:
            return None

        return CompletionEntryDetails(
            name=item.name,
            kind=get_script_element_kind(item, part, location),
            display_parts=item.name,
            documentation=item.description,
        )

    def get_quick_info_at_position(self, template: Template, offset: int) -> Optional[QuickInfo]:
        resolved = self._resolve(template, offset)
        if resolved is None:
            return None

        part, location = resolved
        item = self._find_item(part, location, template, current_word(part, location))
        if item is None:
            return None

        return QuickInfo(
            kind=get_script_element_kind(item, part, location),
            text_span=TextSpan(start=location.start, length=location.end - location.start),
            display_parts=part.raw_name or item.name,
            documentation=item.description,
        )

    def get_supported_code_fixes(self) -> List[Union[str, int]]:
        return list(self._fix_codes)

    def _find_item(
        self, part: TemplatePart, location: TemplatePartLocation, template: Template, name: str
    ) -> Optional[CompletionItem]:
        items = self.completion.get_completion_items(part, location, template) or []
        return find_fully_matched_completion_item(items, name)
