"""Result payload shapes of the host language service.

These mirror the host's wire shapes (camelCase keys in `from_dict`/`to_dict`)
so payloads coming from a JSON based host can be converted both ways.
Position-bearing fields are plain offsets; which coordinate space they are
in depends on who produced them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class TextSpan:
    """A span of text (0-indexed character offset and length)."""
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "length": self.length}

    @classmethod
    def from_dict(cls, d: Dict[str, int]) -> "TextSpan":
        return cls(start=d["start"], length=d["length"])


def _span_or_none(d: Optional[Dict[str, int]]) -> Optional[TextSpan]:
    return TextSpan.from_dict(d) if d else None


def _parts_text(parts: Any) -> str:
    """Flatten symbol display parts to plain text."""
    if isinstance(parts, list):
        return "".join(p.get("text", "") if isinstance(p, dict) else str(p) for p in parts)
    return parts or ""


@dataclass
class CompletionEntry:
    """A single completion entry."""
    name: str
    kind: str
    sort_text: str
    insert_text: Optional[str] = None
    replacement_span: Optional[TextSpan] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"name": self.name, "kind": self.kind, "sortText": self.sort_text}
        if self.insert_text is not None:
            d["insertText"] = self.insert_text
        if self.replacement_span is not None:
            d["replacementSpan"] = self.replacement_span.to_dict()
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CompletionEntry":
        return cls(
            name=d["name"],
            kind=d.get("kind", ""),
            sort_text=d.get("sortText", d["name"]),
            insert_text=d.get("insertText"),
            replacement_span=_span_or_none(d.get("replacementSpan")),
        )


@dataclass
class CompletionInfo:
    """Completion list returned at a position."""
    entries: List[CompletionEntry] = field(default_factory=list)
    is_global_completion: bool = False
    is_member_completion: bool = False
    is_new_identifier_location: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isGlobalCompletion": self.is_global_completion,
            "isMemberCompletion": self.is_member_completion,
            "isNewIdentifierLocation": self.is_new_identifier_location,
            "entries": [e.to_dict() for e in self.entries],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CompletionInfo":
        return cls(
            entries=[CompletionEntry.from_dict(e) for e in d.get("entries", [])],
            is_global_completion=d.get("isGlobalCompletion", False),
            is_member_completion=d.get("isMemberCompletion", False),
            is_new_identifier_location=d.get("isNewIdentifierLocation", False),
        )


@dataclass
class CompletionEntryDetails:
    """Details for one completion entry (no positions)."""
    name: str
    kind: str
    display_parts: str = ""
    documentation: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CompletionEntryDetails":
        return cls(
            name=d["name"],
            kind=d.get("kind", ""),
            display_parts=_parts_text(d.get("displayParts")),
            documentation=_parts_text(d.get("documentation")),
        )


@dataclass
class QuickInfo:
    """Hover information."""
    kind: str
    text_span: TextSpan
    display_parts: str = ""
    documentation: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "QuickInfo":
        return cls(
            kind=d.get("kind", ""),
            text_span=TextSpan.from_dict(d["textSpan"]),
            display_parts=_parts_text(d.get("displayParts")),
            documentation=_parts_text(d.get("documentation")),
        )


@dataclass
class DefinitionInfo:
    """Where a symbol is declared."""
    file_name: str
    text_span: TextSpan
    kind: str = ""
    name: str = ""
    container_name: str = ""

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DefinitionInfo":
        return cls(
            file_name=d["fileName"],
            text_span=TextSpan.from_dict(d["textSpan"]),
            kind=d.get("kind", ""),
            name=d.get("name", ""),
            container_name=d.get("containerName", ""),
        )


@dataclass
class DefinitionInfoAndBoundSpan:
    """Definitions plus the span of the word they were requested for."""
    definitions: List[DefinitionInfo]
    text_span: TextSpan

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DefinitionInfoAndBoundSpan":
        return cls(
            definitions=[DefinitionInfo.from_dict(x) for x in d.get("definitions") or []],
            text_span=TextSpan.from_dict(d["textSpan"]),
        )


@dataclass
class Diagnostic:
    """A diagnostic (error, warning, suggestion, message)."""
    message: str
    start: Optional[int] = None
    length: Optional[int] = None
    file_name: Optional[str] = None
    category: int = 1  # 0=Warning, 1=Error, 2=Suggestion, 3=Message
    code: int = 0
    source: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "messageText": self.message,
            "category": self.category,
            "code": self.code,
        }
        for key, value in (
            ("start", self.start),
            ("length", self.length),
            ("fileName", self.file_name),
            ("source", self.source),
        ):
            if value is not None:
                d[key] = value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Diagnostic":
        return cls(
            message=d.get("messageText", ""),
            start=d.get("start"),
            length=d.get("length"),
            file_name=d.get("fileName"),
            category=d.get("category", 1),
            code=d.get("code", 0),
            source=d.get("source"),
        )

    @property
    def category_name(self) -> str:
        return {0: "Warning", 1: "Error", 2: "Suggestion", 3: "Message"}.get(self.category, "Unknown")


@dataclass
class TextChange:
    """Replace the text covered by `span` with `new_text`."""
    span: TextSpan
    new_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"span": self.span.to_dict(), "newText": self.new_text}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TextChange":
        return cls(span=TextSpan.from_dict(d["span"]), new_text=d.get("newText", ""))


@dataclass
class FileTextChanges:
    """All text changes to apply to one file."""
    file_name: str
    text_changes: List[TextChange] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FileTextChanges":
        return cls(
            file_name=d["fileName"],
            text_changes=[TextChange.from_dict(c) for c in d.get("textChanges", [])],
        )


@dataclass
class CodeFixAction:
    """A code fix, made of changes across one or more files."""
    fix_name: str
    description: str
    changes: List[FileTextChanges] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CodeFixAction":
        return cls(
            fix_name=d.get("fixName", ""),
            description=d.get("description", ""),
            changes=[FileTextChanges.from_dict(c) for c in d.get("changes", [])],
        )


@dataclass
class SignatureHelpItem:
    prefix: str
    suffix: str = ""
    separator: str = ", "
    parameters: List[str] = field(default_factory=list)
    documentation: str = ""


@dataclass
class SignatureHelpItems:
    """Signature help for the call surrounding a position."""
    items: List[SignatureHelpItem]
    applicable_span: TextSpan
    selected_item_index: int = 0
    argument_index: int = 0
    argument_count: int = 0


@dataclass
class OutliningSpan:
    """A collapsible region."""
    text_span: TextSpan
    hint_span: TextSpan
    banner_text: str = "..."
    auto_collapse: bool = False
    kind: str = "code"

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OutliningSpan":
        return cls(
            text_span=TextSpan.from_dict(d["textSpan"]),
            hint_span=TextSpan.from_dict(d["hintSpan"]),
            banner_text=d.get("bannerText", "..."),
            auto_collapse=d.get("autoCollapse", False),
            kind=d.get("kind", "code"),
        )


@dataclass
class ReferenceEntry:
    file_name: str
    text_span: TextSpan
    is_write_access: bool = False


@dataclass
class ReferencedSymbol:
    """A symbol definition together with every reference to it."""
    definition: DefinitionInfo
    references: List[ReferenceEntry] = field(default_factory=list)


@dataclass
class JsxClosingTagInfo:
    """Text to insert to close the tag at a position."""
    new_text: str
