"""Template position model.

A Template is one embedded template region of a document. It owns a local
coordinate space where offset 0 is the first character after the opening
delimiter, and converts offsets between that space and the document's.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Template:
    """One embedded template region.

    Attributes:
        document_name: Name of the owning document.
        start: Global offset of the first template character (inclusive).
        end: Global offset just past the last template character (exclusive).
        text: Template source text, i.e. document text in [start, end).
        tag: Literal tag the template was found under (e.g. "html").
        component: Name of the enclosing class declaration, if any.
    """
    document_name: str
    start: int
    end: int
    text: str = ""
    tag: Optional[str] = None
    component: Optional[str] = None

    def __post_init__(self):
        if not 0 <= self.start <= self.end:
            raise ValueError(
                f"Invalid template range [{self.start}, {self.end}) in '{self.document_name}'"
            )

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        """True if the global offset lies in [start, end)."""
        return self.start <= offset < self.end

    def global_offset_to_local(self, offset: int) -> int:
        """Convert a global offset into this template's local space.

        Raises:
            ValueError: If offset is outside [start, end].
        """
        if not self.start <= offset <= self.end:
            raise ValueError(
                f"Offset {offset} is outside template [{self.start}, {self.end}) "
                f"of '{self.document_name}'"
            )
        return offset - self.start

    def local_offset_to_global(self, offset: int) -> int:
        """Convert a local offset back into the document's space."""
        return offset + self.start

    def intersect_with(self, start: int, end: int) -> bool:
        """True if the global range [start, end) overlaps this template.

        An empty range counts when its position lies inside the template.
        """
        if start == end:
            return self.contains(start)
        return start < self.end and end > self.start

    def clamp_range(self, start: int, end: int) -> Tuple[int, int]:
        """Clip a global range to this template and return it in local space."""
        clipped_start = min(max(start, self.start), self.end)
        clipped_end = min(max(end, self.start), self.end)
        return (
            self.global_offset_to_local(clipped_start),
            self.global_offset_to_local(clipped_end),
        )
