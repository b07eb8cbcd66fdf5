"""Filter Evaluator: Selects the questions matching the current facet state."""

import logging
import random
from typing import List, Optional

from qa_browser.facet_state import FacetState

logger = logging.getLogger(__name__)


class FilterResult:
    """Filtered questions in store order, plus the collection size."""

    def __init__(self, items: list, total: int):
        self.items = items
        self.total = total

    @property
    def filtered_count(self) -> int:
        return len(self.items)

    def ids(self) -> list:
        return [item.item_id for item in self.items]

    def count_text(self) -> str:
        return f"{self.filtered_count} of {self.total} questions shown"

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(_as_text(v) for v in value)
    return str(value)


def build_haystack(item) -> str:
    """Lower-cased search text: id, facets, question, answer, then tags."""
    fields = [
        item.item_id, item.course, item.topic, item.subtopic, item.difficulty,
        item.question.content if item.question else "",
        item.answer.content if item.answer else "",
    ]
    fields.extend(item.tags)
    return " ".join(_as_text(f) for f in fields).lower()


def matches(item, state: FacetState) -> bool:
    """True when ``item`` satisfies every active constraint in ``state``."""
    if state.course and item.course != state.course:
        return False
    # raw field comparison, so "Algebra, Geometry" never matches "Algebra"
    if state.topic and item.topic != state.topic:
        return False
    if state.subtopic and item.subtopic != state.subtopic:
        return False
    if state.difficulty and item.difficulty != state.difficulty:
        return False
    query = state.query.strip().lower()
    return not query or query in build_haystack(item)


def apply_filters(store, state: FacetState) -> FilterResult:
    items = list(store) if store is not None else []
    selected: List = [item for item in items if matches(item, state)]
    logger.debug(f"Filter {state!r}: {len(selected)} of {len(items)}")
    return FilterResult(selected, len(items))


def pick_random(result: FilterResult, rng: Optional[random.Random] = None):
    """Return a random question from ``result``, or None if it is empty."""
    if not result.items:
        return None
    rng = rng or random
    return rng.choice(result.items)
