"""Contract of a template-aware language service.

A template-aware service answers the same questions as the host service,
but for one template at a time and in the template's local coordinates.
Every hook is optional: the decoration layer only wraps host operations
whose hook the service actually implements.
"""

from typing import Any, List, Optional, Protocol, Sequence, Union

from ..templates import Template
from ..types import (
    CodeFixAction,
    CompletionEntryDetails,
    CompletionInfo,
    DefinitionInfo,
    DefinitionInfoAndBoundSpan,
    Diagnostic,
    JsxClosingTagInfo,
    OutliningSpan,
    QuickInfo,
    ReferencedSymbol,
    SignatureHelpItems,
    TextChange,
)


class TemplateLanguageService(Protocol):
    """Hooks a template-aware service may implement.

    Position based hooks take (template, local_offset, *trailing) where
    trailing are the host operation's remaining arguments unchanged.
    Positions in returned payloads are local to the template; the
    decoration layer translates them back to document offsets.

    Partial implementations are valid, e.g. a service implementing only
    get_completions_at_position, so this protocol is not runtime_checkable.
    """

    def get_completions_at_position(
        self, template: Template, offset: int, options: Any = None
    ) -> Optional[CompletionInfo]:
        ...

    def get_completion_entry_details(
        self, template: Template, offset: int, name: str, *args: Any
    ) -> Optional[CompletionEntryDetails]:
        ...

    def get_quick_info_at_position(self, template: Template, offset: int) -> Optional[QuickInfo]:
        ...

    def get_definition_at_position(
        self, template: Template, offset: int
    ) -> Optional[Sequence[DefinitionInfo]]:
        ...

    def get_definition_and_bound_span(
        self, template: Template, offset: int
    ) -> Optional[DefinitionInfoAndBoundSpan]:
        ...

    def get_syntactic_diagnostics(self, template: Template) -> List[Diagnostic]:
        ...

    def get_semantic_diagnostics(self, template: Template) -> List[Diagnostic]:
        ...

    def get_formatting_edits_for_range(
        self, template: Template, start: int, end: int, options: Any = None
    ) -> List[TextChange]:
        ...

    def get_code_fixes_at_position(
        self,
        template: Template,
        start: int,
        end: int,
        error_codes: Sequence[int],
        options: Any = None,
        preferences: Any = None,
    ) -> List[CodeFixAction]:
        ...

    def get_supported_code_fixes(self) -> Sequence[Union[str, int]]:
        ...

    def get_signature_help_items_at_position(
        self, template: Template, offset: int, options: Any = None
    ) -> Optional[SignatureHelpItems]:
        ...

    def get_outlining_spans(self, template: Template) -> List[OutliningSpan]:
        ...

    def get_references_at_position(
        self, template: Template, offset: int
    ) -> Optional[List[ReferencedSymbol]]:
        ...

    def get_jsx_closing_tag_at_position(
        self, template: Template, offset: int
    ) -> Optional[JsxClosingTagInfo]:
        ...
