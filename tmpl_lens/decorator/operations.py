"""Operation table: which host operations are decorated, and how.

Every decorated operation is bound to exactly one merge policy for the
lifetime of the process. For replace operations the translator receives
the whole hook result; for merge operations it receives each item.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from . import translate
from .translate import Translator


class MergePolicy(str, Enum):
    """How a template result is combined with the host result."""
    REPLACE_IF_APPLICABLE = "replace_if_applicable"
    MERGE_WHOLE_DOCUMENT = "merge_whole_document"
    MERGE_RANGE_FILTERED = "merge_range_filtered"
    GLOBAL_REGISTRY = "global_registry"


@dataclass(frozen=True)
class OperationDescriptor:
    """Static description of one decorated operation.

    Attributes:
        host_name: Method name on the host (and composite) service.
        hook_name: Method name on the template-aware service; its presence
            decides whether the operation is decorated at all.
        policy: Merge policy applied on every call.
        translate: Moves template-local positions of a result to document offsets.
    """
    host_name: str
    hook_name: str
    policy: MergePolicy
    translate: Translator = translate.unchanged


def _op(host_name: str, policy: MergePolicy, translator: Translator = translate.unchanged,
        hook_name: str = "") -> OperationDescriptor:
    return OperationDescriptor(
        host_name=host_name,
        hook_name=hook_name or host_name,
        policy=policy,
        translate=translator,
    )


OPERATIONS: Tuple[OperationDescriptor, ...] = (
    _op("get_completions_at_position", MergePolicy.REPLACE_IF_APPLICABLE,
        translate.translate_completion_info),
    _op("get_completion_entry_details", MergePolicy.REPLACE_IF_APPLICABLE),
    _op("get_quick_info_at_position", MergePolicy.REPLACE_IF_APPLICABLE,
        translate.translate_quick_info),
    _op("get_definition_at_position", MergePolicy.REPLACE_IF_APPLICABLE),
    _op("get_definition_and_bound_span", MergePolicy.REPLACE_IF_APPLICABLE,
        translate.translate_definition_and_bound_span),
    _op("get_semantic_diagnostics", MergePolicy.MERGE_WHOLE_DOCUMENT,
        translate.translate_diagnostic),
    _op("get_syntactic_diagnostics", MergePolicy.MERGE_WHOLE_DOCUMENT,
        translate.translate_diagnostic),
    _op("get_formatting_edits_for_range", MergePolicy.MERGE_RANGE_FILTERED,
        translate.translate_text_change),
    _op("get_code_fixes_at_position", MergePolicy.MERGE_RANGE_FILTERED,
        translate.translate_code_fix_action),
    _op("get_supported_code_fixes", MergePolicy.GLOBAL_REGISTRY),
    # The host names this operation without the "AtPosition" suffix.
    _op("get_signature_help_items", MergePolicy.REPLACE_IF_APPLICABLE,
        translate.translate_signature_help,
        hook_name="get_signature_help_items_at_position"),
    _op("get_outlining_spans", MergePolicy.MERGE_WHOLE_DOCUMENT,
        translate.translate_outlining_span),
    # Host surface is find_references, template hook is get_references_at_position.
    _op("find_references", MergePolicy.REPLACE_IF_APPLICABLE,
        translate.translate_referenced_symbols,
        hook_name="get_references_at_position"),
    _op("get_jsx_closing_tag_at_position", MergePolicy.REPLACE_IF_APPLICABLE),
)

OPERATIONS_BY_HOST_NAME: Dict[str, OperationDescriptor] = {
    op.host_name: op for op in OPERATIONS
}
