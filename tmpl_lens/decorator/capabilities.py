"""Capability record of a template-aware service."""

from dataclasses import dataclass, fields
from typing import Any, List


@dataclass(frozen=True)
class ServiceCapabilities:
    """Which hooks a template-aware service implements.

    Built once when the composite service is constructed; dispatch never
    probes the service again.
    """
    get_completions_at_position: bool = False
    get_completion_entry_details: bool = False
    get_quick_info_at_position: bool = False
    get_definition_at_position: bool = False
    get_definition_and_bound_span: bool = False
    get_semantic_diagnostics: bool = False
    get_syntactic_diagnostics: bool = False
    get_formatting_edits_for_range: bool = False
    get_code_fixes_at_position: bool = False
    get_supported_code_fixes: bool = False
    get_signature_help_items_at_position: bool = False
    get_outlining_spans: bool = False
    get_references_at_position: bool = False
    get_jsx_closing_tag_at_position: bool = False

    @classmethod
    def from_service(cls, service: Any) -> "ServiceCapabilities":
        return cls(**{
            f.name: callable(getattr(service, f.name, None))
            for f in fields(cls)
        })

    def supports(self, hook_name: str) -> bool:
        return bool(getattr(self, hook_name, False))

    def supported(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]
