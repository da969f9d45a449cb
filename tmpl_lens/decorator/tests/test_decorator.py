"""Tests for the decoration layer."""

from unittest.mock import MagicMock

import pytest

from tmpl_lens.decorator import (
    ComposedLanguageService,
    LanguageServiceDecorator,
    SupportedFixRegistry,
)
from tmpl_lens.documents import DocumentStore
from tmpl_lens.templates import TemplateLocator
from tmpl_lens.types import (
    CodeFixAction,
    CompletionEntry,
    CompletionInfo,
    DefinitionInfo,
    DefinitionInfoAndBoundSpan,
    Diagnostic,
    FileTextChanges,
    JsxClosingTagInfo,
    OutliningSpan,
    QuickInfo,
    ReferencedSymbol,
    SignatureHelpItem,
    SignatureHelpItems,
    TextChange,
    TextSpan,
)


# Templates at [7, 16) and [43, 52).
TWO_TEMPLATES = "x=html`<b>hi</b>`;\nconst zz = 1234;\ny=html`<i>ok</i>`;\n"
PLAIN = "const a = 1;\n"


class FakeHost:
    """Host language service recording every call."""

    def __init__(self):
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, args))

    def get_completions_at_position(self, file_name, offset, options=None):
        self._record("get_completions_at_position", file_name, offset, options)
        return CompletionInfo(entries=[CompletionEntry(name="hostEntry", kind="var", sort_text="0")])

    def get_quick_info_at_position(self, file_name, offset):
        self._record("get_quick_info_at_position", file_name, offset)
        return QuickInfo(kind="var", text_span=TextSpan(offset, 1), display_parts="host")

    def get_definition_at_position(self, file_name, offset):
        self._record("get_definition_at_position", file_name, offset)
        return [DefinitionInfo(file_name=file_name, text_span=TextSpan(0, 1))]

    def get_semantic_diagnostics(self, file_name):
        self._record("get_semantic_diagnostics", file_name)
        return [Diagnostic(message="host semantic", start=1, length=1, file_name=file_name)]

    def get_syntactic_diagnostics(self, file_name):
        self._record("get_syntactic_diagnostics", file_name)
        return [Diagnostic(message="host syntactic", start=2, length=1, file_name=file_name)]

    def get_outlining_spans(self, file_name):
        self._record("get_outlining_spans", file_name)
        return [OutliningSpan(text_span=TextSpan(0, 5), hint_span=TextSpan(0, 5))]

    def get_formatting_edits_for_range(self, file_name, start, end, options=None):
        self._record("get_formatting_edits_for_range", file_name, start, end, options)
        return [TextChange(span=TextSpan(0, 0), new_text=" ")]

    def get_code_fixes_at_position(self, file_name, start, end, error_codes, options=None, preferences=None):
        self._record("get_code_fixes_at_position", file_name, start, end)
        return []

    def get_supported_code_fixes(self):
        self._record("get_supported_code_fixes")
        return ["2304", "2552"]

    def get_signature_help_items(self, file_name, offset, options=None):
        self._record("get_signature_help_items", file_name, offset)
        return None

    def find_references(self, file_name, offset):
        self._record("find_references", file_name, offset)
        return []

    def get_jsx_closing_tag_at_position(self, file_name, offset):
        self._record("get_jsx_closing_tag_at_position", file_name, offset)
        return None

    def get_navigation_tree(self, file_name):
        self._record("get_navigation_tree", file_name)
        return {"text": file_name}


def completion_hook(template, offset, options=None):
    return CompletionInfo(entries=[
        CompletionEntry(name="click", kind="event", sort_text="click", replacement_span=TextSpan(1, 2)),
        CompletionEntry(name="blur", kind="event", sort_text="blur"),
    ])


def diagnostics_hook(template):
    return [
        Diagnostic(message=f"template {template.start}", start=1, length=2, file_name=template.document_name),
        Diagnostic(message="whole template", file_name=template.document_name),
    ]


def formatting_hook(template, start, end, options=None):
    return [TextChange(span=TextSpan(start, 0), new_text="  ")]


def code_fix_hook(template, start, end, error_codes, options=None, preferences=None):
    return [CodeFixAction(
        fix_name="fixBinding",
        description="Fix binding",
        changes=[
            FileTextChanges(file_name=template.document_name, text_changes=[
                TextChange(span=TextSpan(0, 1), new_text="a"),
                TextChange(span=TextSpan(3, 1), new_text="b"),
            ]),
            FileTextChanges(file_name=template.document_name, text_changes=[
                TextChange(span=TextSpan(5, 0), new_text="c"),
            ]),
        ],
    )]


def make_template_service(**hooks):
    """Template service implementing exactly the given hooks."""
    service = MagicMock(spec=list(hooks))
    for name, impl in hooks.items():
        getattr(service, name).side_effect = impl
    return service


@pytest.fixture
def documents():
    store = DocumentStore()
    store.open("two.ts", TWO_TEMPLATES)
    store.open("plain.ts", PLAIN)
    return store


@pytest.fixture
def locator(documents):
    return TemplateLocator(documents)


@pytest.fixture
def host():
    return FakeHost()


class TestConstruction:
    """Test which operations get decorated."""

    def test_only_implemented_hooks_are_wrapped(self, host, locator):
        service = make_template_service(get_completions_at_position=completion_hook)
        decorator = LanguageServiceDecorator(host, service, locator)
        assert decorator.decorated_operations == ["get_completions_at_position"]

    def test_renamed_surfaces(self, host, locator):
        service = make_template_service(
            get_signature_help_items_at_position=lambda t, o, options=None: None,
            get_references_at_position=lambda t, o: None,
        )
        decorator = LanguageServiceDecorator(host, service, locator)
        assert sorted(decorator.decorated_operations) == ["find_references", "get_signature_help_items"]

    def test_empty_service_decorates_nothing(self, host, locator):
        decorator = LanguageServiceDecorator(host, make_template_service(), locator)
        assert decorator.decorated_operations == []
        assert decorator.fix_registry is None

    def test_decorate_returns_composite(self, host, locator):
        service = make_template_service(get_completions_at_position=completion_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()
        assert isinstance(composite, ComposedLanguageService)
        assert "get_completions_at_position" in dir(composite)
        assert "get_navigation_tree" in dir(composite)


class TestPassThrough:
    """Test operations that are not decorated."""

    def test_unregistered_operation_is_identity(self, host, locator):
        service = make_template_service(get_completions_at_position=completion_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()
        assert composite.get_navigation_tree("two.ts") == {"text": "two.ts"}

    def test_unimplemented_hook_passes_through_inside_template(self, host, locator):
        service = make_template_service(get_completions_at_position=completion_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        info = composite.get_quick_info_at_position("two.ts", 10)
        assert info.display_parts == "host"

    def test_missing_host_attribute_raises(self, host, locator):
        composite = LanguageServiceDecorator(host, make_template_service(), locator).decorate()
        with pytest.raises(AttributeError):
            composite.no_such_operation


class TestReplaceIfApplicable:
    """Test single-position operations."""

    def test_outside_template_returns_host_result(self, host, locator):
        service = make_template_service(get_completions_at_position=completion_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        info = composite.get_completions_at_position("two.ts", 3, None)
        assert [e.name for e in info.entries] == ["hostEntry"]
        service.get_completions_at_position.assert_not_called()

    def test_document_without_templates_returns_host_result(self, host, locator):
        service = make_template_service(get_completions_at_position=completion_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        info = composite.get_completions_at_position("plain.ts", 3, None)
        assert [e.name for e in info.entries] == ["hostEntry"]

    def test_inside_template_replaces_host_result(self, host, locator):
        service = make_template_service(get_completions_at_position=completion_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        options = {"includeExternalModuleExports": False}
        info = composite.get_completions_at_position("two.ts", 10, options)

        assert [e.name for e in info.entries] == ["click", "blur"]
        assert host.calls == []

        template, offset, passed_options = service.get_completions_at_position.call_args.args
        assert (template.start, template.end) == (7, 16)
        assert offset == 3
        assert passed_options is options

    def test_replacement_span_translated(self, host, locator):
        service = make_template_service(get_completions_at_position=completion_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        info = composite.get_completions_at_position("two.ts", 45, None)
        assert info.entries[0].replacement_span == TextSpan(44, 2)
        assert info.entries[1].replacement_span is None

    def test_template_with_no_result_suppresses_host(self, host, locator):
        service = make_template_service(get_quick_info_at_position=lambda t, o: None)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        assert composite.get_quick_info_at_position("two.ts", 10) is None
        assert host.calls == []

    def test_quick_info_span_translated(self, host, locator):
        service = make_template_service(
            get_quick_info_at_position=lambda t, o: QuickInfo(kind="event", text_span=TextSpan(o, 4)),
        )
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        info = composite.get_quick_info_at_position("two.ts", 44)
        assert info.text_span == TextSpan(44, 4)

    def test_definitions_pass_untranslated(self, host, locator):
        definition = DefinitionInfo(file_name="button.ts", text_span=TextSpan(100, 6), name="Button")
        service = make_template_service(get_definition_at_position=lambda t, o: [definition])
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        result = composite.get_definition_at_position("two.ts", 10)
        assert result == [DefinitionInfo(file_name="button.ts", text_span=TextSpan(100, 6), name="Button")]

    def test_bound_span_translated(self, host, locator):
        service = make_template_service(
            get_definition_and_bound_span=lambda t, o: DefinitionInfoAndBoundSpan(
                definitions=[DefinitionInfo(file_name="button.ts", text_span=TextSpan(100, 6))],
                text_span=TextSpan(1, 3),
            ),
        )
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        result = composite.get_definition_and_bound_span("two.ts", 8)
        assert result.text_span == TextSpan(8, 3)
        assert result.definitions[0].text_span == TextSpan(100, 6)

    def test_signature_help_surface(self, host, locator):
        service = make_template_service(
            get_signature_help_items_at_position=lambda t, o, options=None: SignatureHelpItems(
                items=[SignatureHelpItem(prefix="fn(")],
                applicable_span=TextSpan(2, 3),
            ),
        )
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        items = composite.get_signature_help_items("two.ts", 9, None)
        assert items.applicable_span == TextSpan(9, 3)

    def test_find_references_surface(self, host, locator):
        service = make_template_service(
            get_references_at_position=lambda t, o: [
                ReferencedSymbol(definition=DefinitionInfo(file_name=t.document_name, text_span=TextSpan(0, 2))),
            ],
        )
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        symbols = composite.find_references("two.ts", 44)
        assert symbols[0].definition.text_span == TextSpan(43, 2)
        assert host.calls == []

    def test_jsx_closing_tag(self, host, locator):
        service = make_template_service(
            get_jsx_closing_tag_at_position=lambda t, o: JsxClosingTagInfo(new_text="</b>"),
        )
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        assert composite.get_jsx_closing_tag_at_position("two.ts", 10) == JsxClosingTagInfo(new_text="</b>")
        assert composite.get_jsx_closing_tag_at_position("two.ts", 20) is None
        assert host.calls == [("get_jsx_closing_tag_at_position", ("two.ts", 20))]

    def test_completion_entry_details_trailing_args(self, host, locator):
        service = make_template_service(get_completion_entry_details=lambda t, o, name, *rest: None)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        composite.get_completion_entry_details("two.ts", 10, "click", None, None)
        template, offset, name, *rest = service.get_completion_entry_details.call_args.args
        assert (offset, name, rest) == (3, "click", [None, None])


class TestMergeWholeDocument:
    """Test document-wide operations."""

    def test_semantic_diagnostics_merged_and_translated(self, host, locator):
        service = make_template_service(get_semantic_diagnostics=diagnostics_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        diagnostics = composite.get_semantic_diagnostics("two.ts")

        assert [d.message for d in diagnostics] == [
            "host semantic", "template 7", "whole template", "template 43", "whole template",
        ]
        assert [d.start for d in diagnostics] == [1, 8, None, 44, None]
        assert service.get_semantic_diagnostics.call_count == 2

    def test_syntactic_diagnostics_contain_each_template_once(self, host, locator):
        service = make_template_service(get_syntactic_diagnostics=diagnostics_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        diagnostics = composite.get_syntactic_diagnostics("two.ts")
        assert len(diagnostics) == 1 + 2 * 2

    def test_result_not_shorter_than_host(self, host, locator):
        service = make_template_service(get_semantic_diagnostics=diagnostics_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        merged = composite.get_semantic_diagnostics("two.ts")
        host_only = FakeHost().get_semantic_diagnostics("two.ts")
        assert len(merged) >= len(host_only)

    def test_no_templates_gives_host_result(self, host, locator):
        service = make_template_service(get_semantic_diagnostics=diagnostics_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        diagnostics = composite.get_semantic_diagnostics("plain.ts")
        assert [d.message for d in diagnostics] == ["host semantic"]
        service.get_semantic_diagnostics.assert_not_called()

    def test_outlining_spans_translated(self, host, locator):
        service = make_template_service(
            get_outlining_spans=lambda t: [OutliningSpan(text_span=TextSpan(0, 4), hint_span=TextSpan(1, 2))],
        )
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        spans = composite.get_outlining_spans("two.ts")
        assert [s.text_span.start for s in spans] == [0, 7, 43]
        assert [s.hint_span.start for s in spans] == [0, 8, 44]


class TestMergeRangeFiltered:
    """Test ranged operations."""

    def test_formatting_only_visits_intersecting_templates(self, host, locator):
        service = make_template_service(get_formatting_edits_for_range=formatting_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        edits = composite.get_formatting_edits_for_range("two.ts", 0, 10, None)

        assert service.get_formatting_edits_for_range.call_count == 1
        template, start, end, options = service.get_formatting_edits_for_range.call_args.args
        assert template.start == 7
        assert (start, end) == (0, 3)
        assert edits[0].new_text == " "
        assert edits[1].span == TextSpan(7, 0)
        assert len(edits) == 2

    def test_range_outside_all_templates(self, host, locator):
        service = make_template_service(get_formatting_edits_for_range=formatting_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        edits = composite.get_formatting_edits_for_range("two.ts", 20, 30, None)
        assert len(edits) == 1
        service.get_formatting_edits_for_range.assert_not_called()

    def test_range_covering_both_templates(self, host, locator):
        service = make_template_service(get_formatting_edits_for_range=formatting_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        edits = composite.get_formatting_edits_for_range("two.ts", 0, len(TWO_TEMPLATES), None)
        assert [e.span.start for e in edits[1:]] == [7, 43]

    def test_code_fixes_translate_every_nested_span(self, host, locator):
        service = make_template_service(get_code_fixes_at_position=code_fix_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        actions = composite.get_code_fixes_at_position("two.ts", 44, 46, [2304], None, None)

        assert len(actions) == 1
        starts = [
            change.span.start
            for file_changes in actions[0].changes
            for change in file_changes.text_changes
        ]
        assert starts == [43, 46, 48]

        template, start, end, error_codes, options, preferences = service.get_code_fixes_at_position.call_args.args
        assert (template.start, start, end, error_codes) == (43, 1, 3, [2304])


class TestSupportedCodeFixes:
    """Test the fix-code registry."""

    def test_codes_merged_once(self, host, locator):
        service = make_template_service(get_supported_code_fixes=lambda: [9001, "2304"])
        decorator = LanguageServiceDecorator(host, service, locator)
        composite = decorator.decorate()

        first = composite.get_supported_code_fixes()
        second = composite.get_supported_code_fixes()

        assert first == ["2304", "2552", "9001"]
        assert first == second
        assert service.get_supported_code_fixes.call_count == 1
        assert "9001" in decorator.fix_registry

    def test_injected_registry_is_used(self, host, locator):
        registry = SupportedFixRegistry(["1", "2"])
        service = make_template_service(get_supported_code_fixes=lambda: ["3"])
        decorator = LanguageServiceDecorator(host, service, locator, fix_registry=registry)

        assert decorator.decorate().get_supported_code_fixes() == ["1", "2"]
        assert decorator.fix_registry is registry

    def test_host_without_fix_codes(self, locator):
        service = make_template_service(get_supported_code_fixes=lambda: ["9001"])
        composite = LanguageServiceDecorator(object(), service, locator).decorate()
        assert composite.get_supported_code_fixes() == ["9001"]


class TestErrorsAndFreshness:
    """Test failure propagation and document changes."""

    def test_hook_exception_propagates(self, host, locator):
        def failing(template, offset, options=None):
            raise RuntimeError("analyzer failed")

        service = make_template_service(get_completions_at_position=failing)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        with pytest.raises(RuntimeError, match="analyzer failed"):
            composite.get_completions_at_position("two.ts", 10, None)

    def test_host_exception_propagates(self, locator):
        broken_host = MagicMock()
        broken_host.get_semantic_diagnostics.side_effect = ValueError("host failed")
        service = make_template_service(get_semantic_diagnostics=diagnostics_hook)
        composite = LanguageServiceDecorator(broken_host, service, locator).decorate()

        with pytest.raises(ValueError, match="host failed"):
            composite.get_semantic_diagnostics("two.ts")

    def test_document_changes_are_observed(self, host, documents, locator):
        service = make_template_service(get_completions_at_position=completion_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        assert composite.get_completions_at_position("plain.ts", 9, None).entries[0].name == "hostEntry"

        documents.update("plain.ts", "a=html`<div></div>`")
        info = composite.get_completions_at_position("plain.ts", 9, None)
        assert info.entries[0].name == "click"
        assert info.entries[0].replacement_span == TextSpan(8, 2)

    def test_trace_dispatch_writes_trace(self, host, locator, tmp_path, monkeypatch):
        trace_file = tmp_path / "trace.log"
        monkeypatch.setenv("TMPL_LENS_TRACE_LOG", str(trace_file))
        service = make_template_service(get_semantic_diagnostics=diagnostics_hook)
        composite = LanguageServiceDecorator(host, service, locator, trace_dispatch=True).decorate()

        composite.get_semantic_diagnostics("two.ts")
        assert "merge get_semantic_diagnostics two.ts" in trace_file.read_text()


class TestKeywordCalls:
    """Test calls passing host arguments by keyword."""

    def test_keyword_call_outside_template(self, host, locator):
        service = make_template_service(get_quick_info_at_position=lambda t, o: None)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        info = composite.get_quick_info_at_position(file_name="two.ts", offset=3)
        assert info.display_parts == "host"
        service.get_quick_info_at_position.assert_not_called()

    def test_keyword_call_inside_template(self, host, locator):
        service = make_template_service(get_completions_at_position=completion_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        info = composite.get_completions_at_position(file_name="two.ts", offset=10)

        assert info.entries[0].name == "click"
        template, offset, options = service.get_completions_at_position.call_args.args
        assert (template.start, offset, options) == (7, 3, None)
        assert host.calls == []

    def test_mixed_call_on_range_operation(self, host, locator):
        service = make_template_service(get_formatting_edits_for_range=formatting_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        edits = composite.get_formatting_edits_for_range("two.ts", start=0, end=10)

        assert [e.span.start for e in edits] == [0, 7]
        _, start, end, _ = service.get_formatting_edits_for_range.call_args.args
        assert (start, end) == (0, 3)

    def test_keyword_call_on_document_operation(self, host, locator):
        service = make_template_service(get_semantic_diagnostics=diagnostics_hook)
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        assert len(composite.get_semantic_diagnostics(file_name="two.ts")) == 5

    def test_unmappable_keyword_call_goes_to_host(self, locator):
        host = MagicMock()
        host.get_quick_info_at_position.return_value = "host"
        service = make_template_service(get_quick_info_at_position=lambda t, o: "template")
        composite = LanguageServiceDecorator(host, service, locator).decorate()

        assert composite.get_quick_info_at_position(file_name="two.ts", position=10) == "host"
        host.get_quick_info_at_position.assert_called_once_with(file_name="two.ts", position=10)
