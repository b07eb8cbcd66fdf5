"""Facet Extractor: Derives topic/subtopic options from the loaded questions."""

import logging
import re
from typing import Dict, Iterable, List, Set

logger = logging.getLogger(__name__)

FACET_DELIMITER = re.compile(r"\s*[;,]\s*|\s+/\s+")


def normalize_facet_values(value) -> List[str]:
    """Turn a topic/subtopic field into a list of non-empty trimmed strings.

    Accepts a single delimited string ("A, B", "A; B", "A / B") or a sequence
    of strings. Anything else contributes nothing.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [s for s in (str(v).strip() for v in value if v is not None) if s]
    if isinstance(value, str):
        return [s for s in (part.strip() for part in FACET_DELIMITER.split(value)) if s]
    logger.debug(f"Ignoring malformed facet value: {value!r}")
    return []


def _distinct_values(values: Iterable) -> List[str]:
    return sorted({v for v in values if isinstance(v, str) and v})


class FacetIndex:
    """Topic and subtopic options derived from the data, built once per load."""

    def __init__(self):
        self.populated = False
        self.topics: List[str] = []
        self.all_subtopics: List[str] = []
        self.subtopics_by_topic: Dict[str, Set[str]] = {}
        self.courses: List[str] = []
        self.difficulties: List[str] = []

    def populate(self, items) -> bool:
        """Extract facet values from ``items``. Returns False if already populated."""
        if self.populated:
            logger.debug("Facet index already populated; skipping.")
            return False
        self.populated = True

        topics: Set[str] = set()
        all_subtopics: Set[str] = set()
        by_topic: Dict[str, Set[str]] = {}

        items = list(items)
        for item in items:
            topic_list = normalize_facet_values(item.topic_source)
            subtopic_list = normalize_facet_values(item.subtopic_source)

            if not topic_list:
                # no topic to attach these to
                all_subtopics.update(subtopic_list)
                continue

            for t in topic_list:
                topics.add(t)
                subs = by_topic.setdefault(t, set())
                for s in subtopic_list:
                    subs.add(s)
                    all_subtopics.add(s)

        self.topics = sorted(topics)
        self.all_subtopics = sorted(all_subtopics)
        self.subtopics_by_topic = by_topic
        self.courses = _distinct_values(item.course for item in items)
        self.difficulties = _distinct_values(item.difficulty for item in items)

        logger.info(
            f"Facet index: {len(self.topics)} topics, {len(self.all_subtopics)} subtopics"
        )
        return True

    def subtopics_for(self, topic: str) -> List[str]:
        return sorted(self.subtopics_by_topic.get(topic, ()))

    def subtopic_options(self, topic: str = "") -> List[str]:
        """Subtopic choices to offer for the selected topic ("" means any topic)."""
        if not topic:
            return list(self.all_subtopics)
        return self.subtopics_for(topic)

    def to_dict(self) -> dict:
        return {
            "topics": list(self.topics),
            "subtopics": list(self.all_subtopics),
            "subtopics_by_topic": {t: self.subtopics_for(t) for t in self.topics},
            "courses": list(self.courses),
            "difficulties": list(self.difficulties),
        }
