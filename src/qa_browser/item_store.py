"""Item Store: Loads the question collection and keeps it sorted by id."""

import json
import logging
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ItemStoreLoadError(Exception):
    """Raised when the question collection cannot be read or parsed."""


class ContentBlock:
    """A question or answer body."""

    def __init__(self, type: str = "text", content: str = "",
                 images: Optional[list] = None, youtube: Optional[str] = None):
        self.type = type  # "latex" or plain text
        self.content = content
        self.images = images or []
        self.youtube = youtube

    @classmethod
    def from_dict(cls, raw) -> Optional["ContentBlock"]:
        if not isinstance(raw, dict):
            return None
        images = raw.get("images") or []
        if not isinstance(images, (list, tuple)):
            images = [images]
        return cls(
            type=raw.get("type") or "text",
            content=raw.get("content", ""),
            images=[str(src) for src in images],
            youtube=raw.get("youtube"),
        )

    @property
    def is_latex(self) -> bool:
        return self.type == "latex"

    def to_dict(self) -> dict:
        data = {"type": self.type, "content": self.content, "images": list(self.images)}
        if self.youtube:
            data["youtube"] = self.youtube
        return data


class QuizItem:
    """One question/answer record.

    ``topic`` and ``subtopic`` hold the raw loaded values, which is what the
    exact-match filters compare against. ``topic_source`` and
    ``subtopic_source`` also accept the plural ``topics``/``subtopics`` keys
    and feed the facet extractor.
    """

    def __init__(self, item_id, course=None, topic=None, subtopic=None,
                 difficulty=None, tags: Optional[list] = None,
                 question: Optional[ContentBlock] = None,
                 answer: Optional[ContentBlock] = None,
                 topic_source=None, subtopic_source=None):
        self.item_id = item_id
        self.course = course
        self.topic = topic
        self.subtopic = subtopic
        self.difficulty = difficulty
        self.tags = tags or []
        self.question = question
        self.answer = answer
        self.topic_source = topic if topic_source is None else topic_source
        self.subtopic_source = subtopic if subtopic_source is None else subtopic_source

    @classmethod
    def from_dict(cls, raw: dict) -> "QuizItem":
        tags = raw.get("tags") or []
        if not isinstance(tags, (list, tuple)):
            tags = [tags]
        topic = raw.get("topic")
        subtopic = raw.get("subtopic")
        return cls(
            item_id=raw.get("id"),
            course=raw.get("course"),
            topic=topic,
            subtopic=subtopic,
            difficulty=raw.get("difficulty"),
            tags=list(tags),
            question=ContentBlock.from_dict(raw.get("question")),
            answer=ContentBlock.from_dict(raw.get("answer")),
            topic_source=topic if topic is not None else raw.get("topics"),
            subtopic_source=subtopic if subtopic is not None else raw.get("subtopics"),
        )

    @property
    def sort_key(self) -> str:
        return "" if self.item_id is None else str(self.item_id)

    def to_dict(self) -> dict:
        return {
            "id": self.item_id,
            "course": self.course,
            "topic": self.topic,
            "subtopic": self.subtopic,
            "difficulty": self.difficulty,
            "tags": list(self.tags),
            "question": self.question.to_dict() if self.question else None,
            "answer": self.answer.to_dict() if self.answer else None,
        }

    def __repr__(self) -> str:
        return f"QuizItem(id={self.item_id!r})"


class ItemStore:
    """Holds the loaded question collection, sorted once by id."""

    def __init__(self):
        self._items: Tuple[QuizItem, ...] = ()
        self.loaded = False
        self.source: Optional[str] = None

    def load(self, path: str) -> "ItemStore":
        """Read a JSON array of question records from ``path``."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except OSError as e:
            raise ItemStoreLoadError(f"Cannot read question data {path}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ItemStoreLoadError(f"Invalid JSON in {path}: {e}") from e
        return self.load_records(records, source=str(path))

    def load_records(self, records, source: Optional[str] = None) -> "ItemStore":
        if not isinstance(records, list):
            raise ItemStoreLoadError(
                f"Question data must be a JSON array, got {type(records).__name__}"
            )
        items: List[QuizItem] = []
        for i, raw in enumerate(records):
            if not isinstance(raw, dict):
                raise ItemStoreLoadError(f"Record {i} is not an object: {raw!r}")
            items.append(QuizItem.from_dict(raw))
        items.sort(key=lambda item: item.sort_key)
        self._items = tuple(items)
        self.loaded = True
        self.source = source
        logger.info(f"Loaded {len(self._items)} questions from {self.source or 'memory'}")
        return self

    @classmethod
    def from_records(cls, records) -> "ItemStore":
        return cls().load_records(records)

    @property
    def items(self) -> Tuple[QuizItem, ...]:
        return self._items

    def get(self, item_id) -> Optional[QuizItem]:
        for item in self._items:
            if item.item_id == item_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[QuizItem]:
        return iter(self._items)
