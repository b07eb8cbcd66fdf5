"""Facet State: The user's current filter selections."""

from typing import Dict, Optional

FACET_FIELDS = ("course", "topic", "subtopic", "difficulty")


class FacetState:
    """Four exact-match selectors plus a free-text query. Empty means no constraint."""

    def __init__(self, course: str = "", topic: str = "", subtopic: str = "",
                 difficulty: str = "", query: str = ""):
        self.course = course
        self.topic = topic
        self.subtopic = subtopic
        self.difficulty = difficulty
        self.query = query

    @classmethod
    def from_mapping(cls, mapping: Optional[dict]) -> "FacetState":
        mapping = mapping or {}
        values = {
            name: "" if mapping.get(name) is None else str(mapping.get(name))
            for name in FACET_FIELDS + ("query",)
        }
        return cls(**values)

    def is_empty(self) -> bool:
        return not self.active_facets()

    def active_facets(self) -> Dict[str, str]:
        """Non-empty selections, the query included when it has non-space text."""
        active = {name: getattr(self, name) for name in FACET_FIELDS if getattr(self, name)}
        if self.query.strip():
            active["query"] = self.query
        return active

    def reset(self):
        self.course = ""
        self.topic = ""
        self.subtopic = ""
        self.difficulty = ""
        self.query = ""

    def copy(self) -> "FacetState":
        return FacetState(self.course, self.topic, self.subtopic, self.difficulty, self.query)

    def to_dict(self) -> dict:
        return {
            "course": self.course,
            "topic": self.topic,
            "subtopic": self.subtopic,
            "difficulty": self.difficulty,
            "query": self.query,
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, FacetState):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"FacetState({self.active_facets()!r})"
