"""Completion items and the static tables they are drawn from."""

from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .parts import (
    TAG_PART_TYPES,
    TemplatePart,
    TemplatePartLocation,
    TemplatePartLocationType,
    TemplatePartType,
)


class ScriptElementKind:
    """Host completion kinds used for template items."""
    KEYWORD = "keyword"
    CLASS = "class"
    PROPERTY = "property"
    FUNCTION = "function"
    STRING = "string"
    PARAMETER = "parameter"
    EVENT = "event"


@dataclass(frozen=True)
class CompletionItem:
    """A completion candidate before it becomes a host completion entry.

    `start`/`end` override the replacement range, which otherwise is the
    whole template part. Lower `order` sorts first.
    """
    name: str
    description: str = ""
    start: Optional[int] = None
    end: Optional[int] = None
    order: int = 0
    kind: Optional[str] = None


def _items(pairs: Iterable[Sequence[str]], kind: Optional[str] = None) -> List[CompletionItem]:
    return [CompletionItem(name=name, description=description, kind=kind) for name, description in pairs]


CONTROL_FLOW_TAGS = _items([
    ("lu:if", "Render content when the `${condition}` is truthy."),
    ("lu:elseif", "Follows `<lu:if>`, render content when the `${condition}` is truthy."),
    ("lu:else", "Follows `<lu:if>` or `<lu:elseif>`, render content otherwise."),
    ("lu:switch", "Render the first `<lu:case>` matching `${value}`."),
    ("lu:case", "Inside `<lu:switch>`, render content when `${value}` matches."),
    ("lu:default", "Inside `<lu:switch>`, render content when no case matches."),
    ("lu:for", "Render content for each item of `${items}`."),
    ("lu:await", "Render content while `${promise}` is pending."),
    ("lu:then", "Follows `<lu:await>`, render content when the promise resolves."),
    ("lu:catch", "Follows `<lu:await>`, render content when the promise rejects."),
    ("lu:keyed", "Re-create content whenever `${key}` changes."),
    ("lu:portal", "Render content into another container element."),
], kind=ScriptElementKind.KEYWORD)


DOM_ELEMENT_EVENTS = _items([
    ("click", "Fires after a pointer is pressed and released on the element."),
    ("dblclick", "Fires after the element is clicked twice."),
    ("mousedown", "Fires when a pointer button is pressed."),
    ("mouseup", "Fires when a pointer button is released."),
    ("mouseenter", "Fires when the pointer enters the element."),
    ("mouseleave", "Fires when the pointer leaves the element."),
    ("keydown", "Fires when a key is pressed."),
    ("keyup", "Fires when a key is released."),
    ("input", "Fires when the value of an input changes."),
    ("change", "Fires when the value of an input is committed."),
    ("focus", "Fires when the element receives focus."),
    ("blur", "Fires when the element loses focus."),
    ("submit", "Fires when a form is submitted."),
    ("scroll", "Fires when the element is scrolled."),
    ("wheel", "Fires when a wheel button is rotated."),
], kind=ScriptElementKind.EVENT)


SIMULATED_EVENTS = _items([
    ("tap", "Simulated event, fires after a short touch without moving."),
    ("double-tap", "Simulated event, fires after two quick taps."),
    ("hold:start", "Simulated event, fires after touching and holding for a while."),
    ("hold:end", "Simulated event, fires when a hold ends."),
    ("pinch-zoom", "Simulated event, fires while two fingers pinch."),
    ("pinch-rotate", "Simulated event, fires while two fingers rotate."),
    ("slide", "Simulated event, fires after a quick swipe."),
], kind=ScriptElementKind.EVENT)


DOM_EVENT_MODIFIERS: Dict[str, List[CompletionItem]] = {
    "global": _items([
        ("capture", "Listen in the capture phase."),
        ("self", "Trigger only when the event target is the element itself."),
        ("once", "Trigger at most once."),
        ("prevent", "Call `event.preventDefault()`."),
        ("stop", "Call `event.stopPropagation()`."),
        ("passive", "Register as a passive listener."),
    ]),
    "keyboard": _items([
        ("enter", "Trigger only for the Enter key."),
        ("escape", "Trigger only for the Escape key."),
        ("tab", "Trigger only for the Tab key."),
        ("space", "Trigger only for the Space key."),
        ("up", "Trigger only for the ArrowUp key."),
        ("down", "Trigger only for the ArrowDown key."),
        ("left", "Trigger only for the ArrowLeft key."),
        ("right", "Trigger only for the ArrowRight key."),
        ("delete", "Trigger only for the Delete key."),
        ("backspace", "Trigger only for the Backspace key."),
    ]),
    "mouse": _items([
        ("left", "Trigger only for the main button."),
        ("middle", "Trigger only for the auxiliary button."),
        ("right", "Trigger only for the secondary button."),
    ]),
    "change": _items([
        ("check", "Trigger only when the input becomes checked."),
        ("uncheck", "Trigger only when the input becomes unchecked."),
    ]),
    "wheel": _items([
        ("up", "Trigger only when scrolling up."),
        ("down", "Trigger only when scrolling down."),
    ]),
}


# Event name -> key of DOM_EVENT_MODIFIERS with its extra modifiers.
DOM_EVENT_CATEGORIES: Dict[str, str] = {
    "keydown": "keyboard",
    "keyup": "keyboard",
    "keypress": "keyboard",
    "click": "mouse",
    "dblclick": "mouse",
    "mousedown": "mouse",
    "mouseup": "mouse",
    "change": "change",
    "wheel": "wheel",
}


STYLE_PROPERTIES = _items([
    ("display", "How the element is displayed."),
    ("position", "How the element is positioned."),
    ("top", "Top offset of a positioned element."),
    ("right", "Right offset of a positioned element."),
    ("bottom", "Bottom offset of a positioned element."),
    ("left", "Left offset of a positioned element."),
    ("width", "Width of the element."),
    ("height", "Height of the element."),
    ("min-width", "Minimum width of the element."),
    ("max-width", "Maximum width of the element."),
    ("margin", "Outer spacing of the element."),
    ("padding", "Inner spacing of the element."),
    ("color", "Foreground color."),
    ("background", "Background shorthand."),
    ("border", "Border shorthand."),
    ("font-size", "Size of the font."),
    ("opacity", "Opacity from 0 to 1."),
    ("transform", "Transform applied to the element."),
    ("visibility", "Whether the element is visible."),
    ("z-index", "Stack order of a positioned element."),
], kind=ScriptElementKind.PROPERTY)


BINDING_MODIFIERS: Dict[str, List[CompletionItem]] = {
    "style": _items([
        ("px", "Append `px` to the numeric value."),
        ("percent", "Append `%` to the numeric value."),
        ("url", "Wrap the value with `url()`."),
    ]),
    "ref": _items([
        ("el", "Reference the element even on a component."),
        ("com", "Reference the component."),
        ("binding", "Reference the binding instance."),
    ]),
    "transition": _items([
        ("immediate", "Play the transition when first rendered."),
        ("local", "Play only when the element itself is toggled."),
        ("global", "Play when any ancestor is toggled."),
    ]),
}


COMPONENT_ATTRIBUTES = _items([
    ("class", "Appends class names to the component's root element."),
    ("style", "Appends styles to the component's root element."),
])


# Boolean attribute -> tags it applies to, None for any tag.
BOOLEAN_ATTRIBUTES: Dict[str, Optional[Sequence[str]]] = {
    "autofocus": None,
    "hidden": None,
    "inert": None,
    "checked": ("input",),
    "disabled": ("button", "fieldset", "input", "optgroup", "option", "select", "textarea"),
    "multiple": ("input", "select"),
    "open": ("details", "dialog"),
    "readonly": ("input", "textarea"),
    "required": ("input", "select", "textarea"),
    "selected": ("option",),
}


def filter_completion_items(items: Iterable[CompletionItem], prefix: Optional[str]) -> List[CompletionItem]:
    """Items whose name starts with `prefix` (case-insensitive), by order."""
    prefix = (prefix or "").lower()
    matched = [item for item in items if item.name.lower().startswith(prefix)]
    return sorted(matched, key=lambda item: item.order)


def find_fully_matched_completion_item(
    items: Iterable[CompletionItem], name: Optional[str]
) -> Optional[CompletionItem]:
    for item in items:
        if item.name == name:
            return item
    return None


def assign_completion_items(
    items: Iterable[CompletionItem],
    start: Optional[int] = None,
    end: Optional[int] = None,
) -> List[CompletionItem]:
    """Copies of items with their replacement range set.

    Ranges an item already carries are kept.
    """
    return [
        replace(
            item,
            start=item.start if item.start is not None else start,
            end=item.end if item.end is not None else end,
        )
        for item in items
    ]


def map_completion_items(
    items: Iterable[CompletionItem],
    fn: Callable[[CompletionItem], CompletionItem],
) -> List[CompletionItem]:
    return [fn(item) for item in items]


def filter_boolean_attribute_items(prefix: Optional[str], tag_name: str) -> List[CompletionItem]:
    """Boolean attributes valid on `tag_name`, matching `prefix`."""
    tag_name = tag_name.lower()
    items = [
        CompletionItem(name=name, description=f"Boolean attribute `{name}`.", kind=ScriptElementKind.PROPERTY)
        for name, tags in BOOLEAN_ATTRIBUTES.items()
        if tags is None or tag_name in tags
    ]
    return filter_completion_items(items, prefix)


def get_binding_modifier_completion_items(
    main_name: str,
    used_modifiers: Sequence[str],
    available_modifiers: Optional[Sequence[str]],
) -> List[CompletionItem]:
    """Modifier items for a binding, without the ones already written."""
    if not available_modifiers:
        return []

    known = {item.name: item for item in BINDING_MODIFIERS.get(main_name, [])}
    items = []

    for name in available_modifiers:
        if name in used_modifiers:
            continue
        known_item = known.get(name)
        description = known_item.description if known_item else f"Modifier of `:{main_name}`."
        items.append(CompletionItem(name=name, description=description))

    return items


def get_script_element_kind(
    item: CompletionItem, part: TemplatePart, location: TemplatePartLocation
) -> str:
    """Host completion kind to show for an item."""
    if item.kind:
        return item.kind

    if location.type is not TemplatePartLocationType.NAME:
        return ScriptElementKind.STRING

    if part.type in TAG_PART_TYPES:
        return ScriptElementKind.CLASS
    if part.type is TemplatePartType.BINDING:
        return ScriptElementKind.CLASS
    if part.type is TemplatePartType.EVENT:
        return ScriptElementKind.EVENT
    return ScriptElementKind.PROPERTY
