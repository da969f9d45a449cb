"""Tests for binding discovery."""

from unittest.mock import patch

from tmpl_lens.documents import Document, DocumentStore
from tmpl_lens.service import bindings as bindings_module
from tmpl_lens.service.bindings import BindingAnalyzer, analyze_bindings
from tmpl_lens.service.complete_data import ScriptElementKind
from tmpl_lens.templates import Template


BINDINGS_SOURCE = """import {Binding} from 'lupos'

/**
 * Shows a tooltip when hovering the element.
 */
export class tooltip extends Binding {
    constructor(el: Element, context: any, modifiers: ('top' | 'bottom')[]) {
        super()
        class Inner extends Binding {}
    }
}

class Helper {}

export class ClassBinding {
    update() {}
}
"""


class TestAnalyzeBindings:
    """Test scanning one document."""

    def test_finds_bindings(self):
        found = analyze_bindings(Document("bindings.ts", BINDINGS_SOURCE))
        assert [b.name for b in found] == ["tooltip", "class"]
        assert [b.class_name for b in found] == ["tooltip", "ClassBinding"]

    def test_doc_comment_description(self):
        tooltip = analyze_bindings(Document("bindings.ts", BINDINGS_SOURCE))[0]
        assert tooltip.description == "Shows a tooltip when hovering the element."
        assert tooltip.start == BINDINGS_SOURCE.index("tooltip extends")

    def test_constructor_modifiers(self):
        tooltip, class_binding = analyze_bindings(Document("bindings.ts", BINDINGS_SOURCE))
        assert tooltip.modifiers == ["top", "bottom"]
        assert class_binding.modifiers is None
        assert class_binding.description == ""

    def test_qualified_base_class(self):
        source = "export class fade extends lupos.Binding {}\n"
        found = analyze_bindings(Document("fade.ts", source))
        assert [b.name for b in found] == ["fade"]

    def test_no_bindings(self):
        assert analyze_bindings(Document("empty.ts", "const a = 1\n")) == []

    def test_comment_not_adjacent_is_ignored(self):
        source = "/** Unrelated. */\nconst a = 1\nexport class fade extends Binding {}\n"
        assert analyze_bindings(Document("fade.ts", source))[0].description == ""


class TestBindingAnalyzer:
    """Test binding queries over a document store."""

    def make_store(self):
        store = DocumentStore()
        store.open("bindings.ts", BINDINGS_SOURCE)
        store.open("local.ts", "export class tooltip extends Binding {}\n")
        return store

    def test_bindings_for_completion(self):
        analyzer = BindingAnalyzer(self.make_store())
        items = analyzer.get_bindings_for_completion("TOOL")
        assert [item.name for item in items] == ["tooltip", "tooltip"]
        assert all(item.kind == ScriptElementKind.CLASS for item in items)

    def test_binding_by_name_prefers_template_document(self):
        analyzer = BindingAnalyzer(self.make_store())
        template = Template(document_name="local.ts", start=0, end=0)

        assert analyzer.get_binding_by_name("tooltip", template).document_name == "local.ts"
        assert analyzer.get_binding_by_name("tooltip").document_name in ("bindings.ts", "local.ts")
        assert analyzer.get_binding_by_name("missing") is None

    def test_cached_per_version(self):
        store = self.make_store()
        analyzer = BindingAnalyzer(store)

        with patch.object(bindings_module, "analyze_bindings", wraps=analyze_bindings) as spy:
            analyzer.all_bindings()
            analyzer.all_bindings()
            assert spy.call_count == 2

            store.update("local.ts", "export class fade extends Binding {}\n")
            names = [b.name for b in analyzer.all_bindings()]
            assert spy.call_count == 3

        assert "fade" in names

    def test_reopened_document_is_reanalyzed(self):
        store = self.make_store()
        analyzer = BindingAnalyzer(store)
        assert "fade" not in [b.name for b in analyzer.all_bindings()]

        store.close("local.ts")
        store.open("local.ts", "export class fade extends Binding {}\n")

        found = [(b.name, b.document_name) for b in analyzer.all_bindings()]
        assert ("fade", "local.ts") in found
        assert ("tooltip", "local.ts") not in found

    def test_closed_documents_leave_the_cache(self):
        store = self.make_store()
        analyzer = BindingAnalyzer(store)
        analyzer.all_bindings()

        store.close("local.ts")
        assert [b.document_name for b in analyzer.all_bindings()] == ["bindings.ts", "bindings.ts"]
        assert "local.ts" not in analyzer._cache
