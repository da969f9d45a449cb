"""Parsed template parts.

Template parts are produced by an external template parser. Offsets in
parts and locations are local to the template they were parsed from.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class TemplatePartType(str, Enum):
    """What kind of template fragment a part is."""
    COMPONENT = "component"                    # <Button>
    DYNAMIC_COMPONENT = "dynamic_component"    # <${Button}>
    FLOW_CONTROL = "flow_control"              # <lu:if>
    SLOT_TAG = "slot_tag"                      # <slot>
    NORMAL_START_TAG = "normal_start_tag"      # <div>
    BINDING = "binding"                        # :class, ?:binding
    QUERY_ATTRIBUTE = "query_attribute"        # ?disabled
    PROPERTY = "property"                      # .value
    EVENT = "event"                            # @click, @@change
    SLOTTED_ATTRIBUTE = "slotted_attribute"    # attr=${value}
    UNSLOTTED_ATTRIBUTE = "unslotted_attribute"  # attr="value"
    CONTENT = "content"                        # text between tags


TAG_PART_TYPES = frozenset({
    TemplatePartType.COMPONENT,
    TemplatePartType.DYNAMIC_COMPONENT,
    TemplatePartType.FLOW_CONTROL,
    TemplatePartType.SLOT_TAG,
    TemplatePartType.NORMAL_START_TAG,
})


class TemplatePartLocationType(str, Enum):
    """Which piece of a part a position falls on."""
    NAME = "name"              # `@click|`
    MODIFIER = "modifier"      # `@click.sto|`
    ATTR_VALUE = "attr_value"  # `.type="|"`


@dataclass
class TemplateAttribute:
    name: str
    value: Optional[str] = None


@dataclass
class TemplatePart:
    """One parsed fragment of a template.

    Attributes:
        type: Fragment classification.
        start: Local start offset of the part.
        end: Local end offset of the part.
        raw_name: Name as written, prefix included (e.g. "@click.stop").
        main_name: Name without prefix and modifiers (e.g. "click").
        modifiers: Modifiers after the main name (e.g. ["stop"]).
        attr: Attribute the part was parsed from, if any.
        tag_name: Tag of the element the part belongs to.
    """
    type: TemplatePartType
    start: int
    end: int
    raw_name: str = ""
    main_name: Optional[str] = None
    modifiers: List[str] = field(default_factory=list)
    attr: Optional[TemplateAttribute] = None
    tag_name: str = ""


@dataclass
class TemplatePartLocation:
    """Where inside a part a position falls, with the range to replace."""
    type: TemplatePartLocationType
    start: int
    end: int
    modifier_index: Optional[int] = None


def is_component_tag(tag_name: Optional[str]) -> bool:
    """Component tags start with an uppercase letter, e.g. `<Button>`."""
    return bool(tag_name) and tag_name[0].isupper()
