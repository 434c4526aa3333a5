#models.py
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple

QUALIFICATIONS = ("fully-qualified", "minimally-qualified", "unqualified", "component")

# Field name -> filter value, rebuilt on every filter event.
FilterState = Dict[str, str]


@dataclass(frozen=True)
class RawRecord:
    """One emoji as read from an upstream source."""
    codepoints: Tuple[str, ...]
    emoji: str
    description: str
    version: str
    group: str = ""
    subgroup: str = ""
    qualification: Optional[str] = None
    keywords: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.codepoints:
            raise ValueError("codepoints must not be empty")
        if not self.description:
            raise ValueError("description must not be empty")

    def to_dict(self) -> Dict[str, Any]:
        data = {"codepoints": " ".join(self.codepoints)}
        if self.qualification:
            data["qualification"] = self.qualification
        data.update({
            "version": self.version,
            "emoji": self.emoji,
            "description": self.description,
            "group": self.group,
            "subgroup": self.subgroup,
        })
        if self.keywords:
            data["keywords"] = list(self.keywords)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawRecord":
        return cls(
            codepoints=tuple(data.get("codepoints", "").split()),
            emoji=data.get("emoji", ""),
            description=data.get("description", ""),
            version=data.get("version", ""),
            group=data.get("group", ""),
            subgroup=data.get("subgroup", ""),
            qualification=data.get("qualification") or None,
            keywords=tuple(data.get("keywords") or ()),
        )


@dataclass(frozen=True)
class NormalizedRecord:
    record: RawRecord
    tags: FrozenSet[str]
    order: int

    def field_value(self, name: str) -> Any:
        if name == "codepoints":
            return " ".join(self.record.codepoints)
        if name in ("tags", "order"):
            return getattr(self, name)
        return getattr(self.record, name)


@dataclass(frozen=True)
class GemojiEntry:
    glyph: str
    aliases: FrozenSet[str] = frozenset()
    tags: FrozenSet[str] = frozenset()
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GemojiEntry":
        return cls(
            glyph=data.get("emoji", ""),
            aliases=frozenset(data.get("aliases") or ()),
            tags=frozenset(data.get("tags") or ()),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class ParseDiagnostic:
    line_number: int
    line: str

    def __str__(self):
        return f"line {self.line_number}: {self.line}"


@dataclass(frozen=True)
class SortState:
    field: str
    direction: str = "asc"

    def __post_init__(self):
        if self.direction not in ("asc", "desc"):
            raise ValueError(f"Invalid sort direction: {self.direction!r}")

    @property
    def descending(self) -> bool:
        return self.direction == "desc"
