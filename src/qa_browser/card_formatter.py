"""Card Formatter: Plain-text cards for the terminal."""

from typing import List
from urllib.parse import parse_qs, urlparse

EMBED_BASE = "https://www.youtube.com/embed/"


def embed_youtube_url(url: str) -> str:
    """Rewrite a watch or short link to its embed form; other URLs pass through."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return url
    host = parsed.hostname or ""
    if "youtu.be" in host:
        return EMBED_BASE + parsed.path.lstrip("/")
    if "youtube.com" in host:
        video_id = parse_qs(parsed.query).get("v")
        if video_id:
            return EMBED_BASE + video_id[0]
    return url


def _block_lines(block, label: str) -> List[str]:
    if block is None:
        return []
    lines = [f"{label}:"]
    if block.content:
        prefix = "  [latex] " if block.is_latex else "  "
        lines.append(f"{prefix}{block.content}")
    for src in block.images:
        lines.append(f"  image: {src}")
    return lines


def format_card(item, reveal: bool = False) -> str:
    badges = " ".join(
        f"[{value}]" for value in (item.course, item.topic, item.subtopic, item.difficulty)
        if value
    )
    lines = [badges, f"== {item.item_id} =="] if badges else [f"== {item.item_id} =="]
    lines.extend(_block_lines(item.question, "Question"))
    if reveal:
        lines.extend(_block_lines(item.answer, "Answer"))
        if item.answer is not None and item.answer.youtube:
            lines.append(f"  video: {embed_youtube_url(item.answer.youtube)}")
    elif item.answer is not None:
        lines.append("(answer hidden, use --reveal)")
    return "\n".join(lines)


def format_facets(index) -> str:
    lines = [
        "Courses: " + (", ".join(index.courses) or "-"),
        "Difficulties: " + (", ".join(index.difficulties) or "-"),
        "Topics:",
    ]
    attached = set()
    for topic in index.topics:
        subs = index.subtopics_for(topic)
        attached.update(subs)
        lines.append(f"  {topic}: {', '.join(subs) or '-'}")
    orphans = [s for s in index.all_subtopics if s not in attached]
    if orphans:
        lines.append("Subtopics without a topic: " + ", ".join(orphans))
    return "\n".join(lines)
