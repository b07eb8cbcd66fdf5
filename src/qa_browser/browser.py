"""Question Browser: Coordinates loading, facet options and filtering."""

import logging
from typing import List, Optional

from qa_browser.facet_index import FacetIndex
from qa_browser.facet_state import FacetState
from qa_browser.filter_evaluator import FilterResult, apply_filters, pick_random
from qa_browser.item_store import ItemStore

logger = logging.getLogger(__name__)


class QuestionBrowser:
    """
    Owns the facet state for one browsing session.
    Every change event re-runs the filter over the whole collection; a topic
    change first replaces the offered subtopic options.
    """

    def __init__(self, item_store: Optional[ItemStore] = None,
                 facet_index: Optional[FacetIndex] = None,
                 state: Optional[FacetState] = None):
        self.store = item_store if item_store is not None else ItemStore()
        self.index = facet_index or FacetIndex()
        self.state = state or FacetState()
        self.subtopic_options: List[str] = []
        self.result = FilterResult([], 0)
        self._load_count = 0

    def load(self, path: str) -> FilterResult:
        """Load questions from a JSON file and run the initial filter pass."""
        self.store.load(path)
        return self._after_load()

    def load_records(self, records) -> FilterResult:
        self.store.load_records(records)
        return self._after_load()

    def _after_load(self) -> FilterResult:
        if self._load_count:
            # options must come from the data just loaded
            self.index = FacetIndex()
        self._load_count += 1
        self.index.populate(self.store)
        self.subtopic_options = self.index.subtopic_options(self.state.topic)
        return self.refresh()

    def refresh(self) -> FilterResult:
        self.result = apply_filters(self.store, self.state)
        return self.result

    def set_topic(self, topic: str) -> FilterResult:
        """Select a topic and narrow subtopic options to it.

        The selected subtopic is kept even when the new topic does not offer
        it; such a state matches nothing until the subtopic is changed.
        """
        self.state.topic = topic or ""
        self.subtopic_options = self.index.subtopic_options(self.state.topic)
        if self.state.subtopic and self.state.subtopic not in self.subtopic_options:
            logger.debug(
                f"Subtopic {self.state.subtopic!r} is not offered under topic {self.state.topic!r}"
            )
        return self.refresh()

    def set_course(self, course: str) -> FilterResult:
        self.state.course = course or ""
        return self.refresh()

    def set_subtopic(self, subtopic: str) -> FilterResult:
        self.state.subtopic = subtopic or ""
        return self.refresh()

    def set_difficulty(self, difficulty: str) -> FilterResult:
        self.state.difficulty = difficulty or ""
        return self.refresh()

    def set_query(self, query: str) -> FilterResult:
        self.state.query = query or ""
        return self.refresh()

    def clear_query(self) -> FilterResult:
        return self.set_query("")

    def reset_filters(self) -> FilterResult:
        self.state.reset()
        self.subtopic_options = self.index.subtopic_options("")
        return self.refresh()

    def apply_state(self, state: FacetState) -> FilterResult:
        """Replace every selection at once, topic rule included."""
        self.state.course = state.course
        self.state.subtopic = state.subtopic
        self.state.difficulty = state.difficulty
        self.state.query = state.query
        return self.set_topic(state.topic)

    def random_item(self, rng=None):
        return pick_random(self.result, rng)

    def count_text(self) -> str:
        return self.result.count_text()
