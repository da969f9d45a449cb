"""Translate positions in template service results to document offsets.

Each translator rewrites, in place, the fields of one result shape that
carry template-local offsets, and returns the same object. Fields of other
shapes, and absent optional spans, are left alone.
"""

from typing import Any, Callable, Optional

from ..templates import Template
from ..types import (
    CodeFixAction,
    CompletionInfo,
    DefinitionInfoAndBoundSpan,
    Diagnostic,
    OutliningSpan,
    QuickInfo,
    ReferencedSymbol,
    SignatureHelpItems,
    TextChange,
    TextSpan,
)

Translator = Callable[[Any, Template], Any]


def translate_text_span(span: Optional[TextSpan], template: Template) -> None:
    """Move a span from template-local to document offsets."""
    if span is not None:
        span.start = template.local_offset_to_global(span.start)


def unchanged(result: Any, template: Template) -> Any:
    return result


def translate_completion_info(info: CompletionInfo, template: Template) -> CompletionInfo:
    for entry in info.entries:
        translate_text_span(entry.replacement_span, template)
    return info


def translate_quick_info(info: QuickInfo, template: Template) -> QuickInfo:
    translate_text_span(info.text_span, template)
    return info


def translate_definition_and_bound_span(
    result: DefinitionInfoAndBoundSpan, template: Template
) -> DefinitionInfoAndBoundSpan:
    # Definitions point at declarations, only the bound word lives in the template.
    translate_text_span(result.text_span, template)
    return result


def translate_signature_help(items: SignatureHelpItems, template: Template) -> SignatureHelpItems:
    translate_text_span(items.applicable_span, template)
    return items


def translate_referenced_symbols(symbols: Any, template: Template) -> Any:
    for symbol in symbols:
        translate_referenced_symbol(symbol, template)
    return symbols


def translate_referenced_symbol(symbol: ReferencedSymbol, template: Template) -> ReferencedSymbol:
    translate_text_span(symbol.definition.text_span, template)
    return symbol


def translate_diagnostic(diagnostic: Diagnostic, template: Template) -> Diagnostic:
    if diagnostic.start is not None:
        diagnostic.start = template.local_offset_to_global(diagnostic.start)
    return diagnostic


def translate_outlining_span(span: OutliningSpan, template: Template) -> OutliningSpan:
    translate_text_span(span.text_span, template)
    translate_text_span(span.hint_span, template)
    return span


def translate_text_change(change: TextChange, template: Template) -> TextChange:
    translate_text_span(change.span, template)
    return change


def translate_code_fix_action(action: CodeFixAction, template: Template) -> CodeFixAction:
    for file_changes in action.changes:
        for change in file_changes.text_changes:
            translate_text_span(change.span, template)
    return action
