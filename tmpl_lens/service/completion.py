"""Completion provider for template parts.

Given the part under the cursor and where inside the part the cursor is,
produce completion candidates: component and control-flow tags, binding
names and modifiers, boolean attributes, component properties and their
values, and events with their modifiers.

Domain entities (components, their properties and events, bindings) are
resolved by an analyzer; this module only decides what to ask for.
"""

import logging
from typing import Any, List, Optional, Protocol, Sequence, Set

from ..templates import Template
from ..types import CompletionEntry, CompletionInfo, TextSpan
from .bindings import Binding
from .complete_data import (
    BINDING_MODIFIERS,
    COMPONENT_ATTRIBUTES,
    CONTROL_FLOW_TAGS,
    DOM_ELEMENT_EVENTS,
    DOM_EVENT_CATEGORIES,
    DOM_EVENT_MODIFIERS,
    SIMULATED_EVENTS,
    STYLE_PROPERTIES,
    CompletionItem,
    assign_completion_items,
    filter_boolean_attribute_items,
    filter_completion_items,
    find_fully_matched_completion_item,
    get_binding_modifier_completion_items,
    get_script_element_kind,
    map_completion_items,
)
from .parts import (
    TAG_PART_TYPES,
    TemplatePart,
    TemplatePartLocation,
    TemplatePartLocationType,
    TemplatePartType,
    is_component_tag,
)

logger = logging.getLogger(__name__)


class TemplateAnalyzer(Protocol):
    """Resolves template domain entities from declarations.

    Components are opaque to this module; whatever the analyzer returns
    from get_components_by_tag_name is passed back to it unchanged.
    """

    def get_components_for_completion(self, prefix: str) -> List[CompletionItem]:
        ...

    def get_components_by_tag_name(self, tag_name: str, template: Template) -> List[Any]:
        ...

    def get_component_properties_for_completion(self, component: Any, prefix: str) -> List[CompletionItem]:
        ...

    def get_component_property_values(self, component: Any, name: str) -> Optional[List[str]]:
        """String literals of a property's union type, None if no such property."""
        ...

    def get_component_events_for_completion(self, component: Any, prefix: str) -> List[CompletionItem]:
        ...

    def get_sub_properties_for_completion(
        self, component_name: Optional[str], property_name: str, prefix: str
    ) -> List[CompletionItem]:
        ...

    def get_icons_for_completion(self, prefix: str) -> List[CompletionItem]:
        ...

    def get_bindings_for_completion(self, prefix: Optional[str]) -> List[CompletionItem]:
        ...

    def get_binding_by_name(self, name: str, template: Optional[Template] = None) -> Optional[Binding]:
        ...


class TemplateCompletion:
    """Provides template completions."""

    def __init__(self, analyzer: TemplateAnalyzer):
        self.analyzer = analyzer

    def get_completions(
        self, part: TemplatePart, location: TemplatePartLocation, template: Template
    ) -> Optional[CompletionInfo]:
        items = self.get_completion_items(part, location, template)
        return self.make_completion_info(items, part, location)

    def get_completion_items(
        self, part: TemplatePart, location: TemplatePartLocation, template: Template
    ) -> Optional[List[CompletionItem]]:
        logger.debug("Completing %s part %r at %s", part.type.value, part.raw_name, location.type.value)

        # `<a|`, `<|`, `<A|`, `<lu:|`
        if part.type in TAG_PART_TYPES:
            components = self.analyzer.get_components_for_completion(part.tag_name)
            flow_control_items = filter_completion_items(CONTROL_FLOW_TAGS, part.tag_name)
            return [*components, *flow_control_items]

        # `:binding`, `?:binding`
        if part.type is TemplatePartType.BINDING:
            return self._get_binding_items(part, location, template)

        # `?xxx`
        if part.type is TemplatePartType.QUERY_ATTRIBUTE:
            return self._get_query_attribute_items(part, location)

        # `.xxx`
        if part.type is TemplatePartType.PROPERTY:
            return self._get_property_items(part, location, template)

        # `@xxx` or `@@xxx`
        if part.type is TemplatePartType.EVENT:
            return self._get_event_items(part, location, template)

        # `<Com class="|">`
        if (part.type is TemplatePartType.UNSLOTTED_ATTRIBUTE
                and is_component_tag(part.tag_name)
                and location.type is TemplatePartLocationType.ATTR_VALUE):
            item = find_fully_matched_completion_item(COMPONENT_ATTRIBUTES, part.raw_name)
            if item:
                return [item]

        return None

    def _get_binding_items(
        self, part: TemplatePart, location: TemplatePartLocation, template: Template
    ) -> List[CompletionItem]:
        main_name = part.main_name or ""

        # `:name|`
        if location.type is TemplatePartLocationType.NAME:
            items = self.analyzer.get_bindings_for_completion(main_name)
            return assign_completion_items(items, location.start, location.end)

        # `:ref.|`
        if location.type is TemplatePartLocationType.MODIFIER:
            return self._get_binding_modifier_items(part, location, template)

        # `:slot="|"`
        if location.type is TemplatePartLocationType.ATTR_VALUE and main_name == "slot":
            attr_value = part.attr.value if part.attr and part.attr.value else ""
            items = self.analyzer.get_sub_properties_for_completion(
                template.component, "slotElements", attr_value
            )
            return assign_completion_items(items, location.start, location.end)

        # `:class` values are left to CSS tooling.
        return []

    def _get_binding_modifier_items(
        self, part: TemplatePart, location: TemplatePartLocation, template: Template
    ) -> List[CompletionItem]:
        main_name = part.main_name or ""
        modifiers = part.modifiers
        modifier_index = location.modifier_index or 0
        modifier_value = modifiers[modifier_index] if modifier_index < len(modifiers) else ""

        if main_name == "style":
            # `:style.|` property, then `:style.width.|` unit.
            if modifier_index == 0:
                filtered = filter_completion_items(STYLE_PROPERTIES, modifier_value)
            elif modifier_index == 1:
                filtered = filter_completion_items(BINDING_MODIFIERS["style"], modifier_value)
            else:
                filtered = []
            return assign_completion_items(filtered, location.start, location.end)

        available: Optional[Sequence[str]] = None

        binding = self.analyzer.get_binding_by_name(main_name, template)
        if binding is not None and binding.modifiers:
            available = binding.modifiers

        if not available and main_name in BINDING_MODIFIERS:
            available = [item.name for item in BINDING_MODIFIERS[main_name]]

        used = [m for i, m in enumerate(modifiers) if i != modifier_index]
        items = get_binding_modifier_completion_items(main_name, used, available)
        filtered = filter_completion_items(items, modifier_value)
        return assign_completion_items(filtered, location.start, location.end)

    def _get_query_attribute_items(
        self, part: TemplatePart, location: TemplatePartLocation
    ) -> List[CompletionItem]:
        if location.type is not TemplatePartLocationType.NAME:
            return []

        items = filter_boolean_attribute_items(part.main_name, part.tag_name)
        # Replace after the leading `?`.
        return assign_completion_items(items, part.start + 1, part.end)

    def _get_property_items(
        self, part: TemplatePart, location: TemplatePartLocation, template: Template
    ) -> List[CompletionItem]:
        main_name = part.main_name or ""
        items: List[CompletionItem] = []

        # `.|property|`
        if location.type is TemplatePartLocationType.NAME:
            for component in self.analyzer.get_components_by_tag_name(part.tag_name, template):
                properties = self.analyzer.get_component_properties_for_completion(component, main_name)
                items.extend(assign_completion_items(properties, location.start, location.end))

        # `.property="|"`
        elif location.type is TemplatePartLocationType.ATTR_VALUE:
            attr_value = part.attr.value if part.attr and part.attr.value else ""

            # `<Icon .type="|">`
            if "Icon" in part.tag_name and main_name == "type":
                icons = self.analyzer.get_icons_for_completion(attr_value)
                items.extend(assign_completion_items(icons, location.start, location.end))

            # `.prop="a" | "b" | "c"`
            else:
                for component in self.analyzer.get_components_by_tag_name(part.tag_name, template):
                    values = self.analyzer.get_component_property_values(component, main_name)
                    if not values:
                        continue
                    value_items = [CompletionItem(name=value) for value in values]
                    items.extend(assign_completion_items(value_items, location.start, location.end))

        return items

    def _get_event_items(
        self, part: TemplatePart, location: TemplatePartLocation, template: Template
    ) -> List[CompletionItem]:
        main_name = part.main_name or ""
        modifiers = part.modifiers
        components = (
            list(self.analyzer.get_components_by_tag_name(part.tag_name, template))
            if is_component_tag(part.tag_name) else []
        )
        dom_events = filter_completion_items(DOM_ELEMENT_EVENTS, main_name)
        fully_matched_dom_event = find_fully_matched_completion_item(dom_events, main_name)
        items: List[CompletionItem] = []

        # `@cli|`
        if location.type is TemplatePartLocationType.NAME:
            com_events = [
                event
                for component in components
                for event in self.analyzer.get_component_events_for_completion(component, main_name)
            ]
            # Component events are written `@@event`.
            com_items = map_completion_items(com_events, lambda item: CompletionItem(
                name="@" + item.name,
                description=item.description,
                order=item.order,
                kind=item.kind,
            ))
            sim_items = filter_completion_items(SIMULATED_EVENTS, main_name)
            items.extend(assign_completion_items(
                [*com_items, *dom_events, *sim_items], location.start, location.end
            ))

        # `@click.|`
        elif location.type is TemplatePartLocationType.MODIFIER and fully_matched_dom_event:
            modifier_index = location.modifier_index or 0
            modifier_value = modifiers[modifier_index] if modifier_index < len(modifiers) else ""

            global_items = [
                item for item in filter_completion_items(DOM_EVENT_MODIFIERS["global"], modifier_value)
                if item.name not in modifiers
            ]
            items.extend(assign_completion_items(global_items, location.start, location.end))

            # `@keydown.enter`, `@click.left`
            category = DOM_EVENT_CATEGORIES.get(main_name)
            if category:
                category_items = filter_completion_items(DOM_EVENT_MODIFIERS[category], modifier_value)
                items.extend(assign_completion_items(category_items, location.start, location.end))

        return items

    def make_completion_info(
        self,
        items: Optional[List[CompletionItem]],
        part: TemplatePart,
        location: TemplatePartLocation,
    ) -> Optional[CompletionInfo]:
        """Build host completion entries, one per distinct name."""
        if items is None:
            return None

        names: Set[str] = set()
        entries: List[CompletionEntry] = []

        for item in items:
            if item.name in names:
                continue
            names.add(item.name)

            start = item.start if item.start is not None else part.start
            end = item.end if item.end is not None else part.end

            entries.append(CompletionEntry(
                name=item.name,
                kind=get_script_element_kind(item, part, location),
                sort_text=item.name,
                insert_text=item.name,
                replacement_span=TextSpan(start=start, length=end - start),
            ))

        return CompletionInfo(entries=entries)
