"""Hierarchical group path value object."""

import re
from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import quote

from ...config.constants import GROUP_PATH_DELIMITER, GROUP_PATH_SEPARATOR

_SEGMENT_SPLIT = re.compile(f"{re.escape(GROUP_PATH_SEPARATOR)}|{re.escape(GROUP_PATH_DELIMITER)}")


@dataclass(frozen=True)
class GroupPath:
    """Group path held as a tuple of segment names.

    Logical ids may use either "/" or the " ¦ " delimiter between levels.
    Segments are only joined back into a string at the wire boundary.
    """

    segments: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, value: Optional[str]) -> "GroupPath":
        """Parse a delimited path, ignoring empty segments."""
        if not value:
            return cls()
        return cls(tuple(segment for segment in _SEGMENT_SPLIT.split(value) if segment))

    @classmethod
    def of(cls, *segments: str) -> "GroupPath":
        return cls(tuple(segment for segment in segments if segment))

    def __bool__(self) -> bool:
        return bool(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return GROUP_PATH_SEPARATOR.join(self.segments)

    def join(self, other: "GroupPath") -> "GroupPath":
        return GroupPath(self.segments + other.segments)

    def starts_with(self, prefix: "GroupPath", ignore_case: bool = False) -> bool:
        """Check whether the leading segments equal those of prefix."""
        if len(prefix) > len(self):
            return False
        head = self.segments[: len(prefix)]
        if ignore_case:
            return [s.casefold() for s in head] == [s.casefold() for s in prefix.segments]
        return head == prefix.segments

    def relative_to(self, root: "GroupPath", ignore_case: bool = False) -> "GroupPath":
        """Strip root from the front of this path when present."""
        if root and self.starts_with(root, ignore_case=ignore_case):
            return GroupPath(self.segments[len(root):])
        return self

    def to_absolute(self) -> str:
        """Render as a Keycloak group path such as "/tenants/acme"."""
        return GROUP_PATH_SEPARATOR + str(self)

    def to_url_path(self) -> str:
        """Render percent-encoded segments for a URL path."""
        return GROUP_PATH_SEPARATOR.join(quote(segment, safe="") for segment in self.segments)
