"""Command line entry point for the QA Browser."""

import argparse
import logging
from pathlib import Path

import yaml

from qa_browser.browser import QuestionBrowser
from qa_browser.card_formatter import format_card, format_facets
from qa_browser.facet_state import FACET_FIELDS, FacetState
from qa_browser.item_store import ItemStoreLoadError

logger = logging.getLogger(__name__)


def load_config(path: str) -> dict:
    config_path = Path(path)
    if not config_path.exists():
        return {}
    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse and filter a quiz question bank")
    parser.add_argument("--config", default="config.yaml", help="Config file path")
    parser.add_argument("--questions", default=None, help="Question bank path")
    parser.add_argument("--course", default=None)
    parser.add_argument("--topic", default=None)
    parser.add_argument("--subtopic", default=None)
    parser.add_argument("--difficulty", default=None)
    parser.add_argument("--query", "-q", default=None, help="Case-insensitive text search")
    parser.add_argument("--random", action="store_true", help="Show one random matching question")
    parser.add_argument("--reveal", action="store_true", help="Show answers")
    parser.add_argument("--list-facets", action="store_true", help="List available filter values")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    config = load_config(args.config)
    data_cfg = config.get("data") or {}
    filter_cfg = dict(config.get("filters") or {})
    display_cfg = config.get("display") or {}

    for name in FACET_FIELDS + ("query",):
        value = getattr(args, name)
        if value is not None:
            filter_cfg[name] = value
    questions_path = args.questions or data_cfg.get("questions", "data/questions.json")
    reveal = args.reveal or display_cfg.get("reveal_answers", False)

    browser = QuestionBrowser()
    try:
        browser.load(questions_path)
    except ItemStoreLoadError as e:
        logger.error(f"Failed to load questions: {e}")
        print(f"Could not load questions: {e}")
        return 1

    if args.list_facets:
        print(format_facets(browser.index))
        return 0

    result = browser.apply_state(FacetState.from_mapping(filter_cfg))

    if args.random:
        item = browser.random_item()
        if item is None:
            print("No questions match the current filters.")
        else:
            print(format_card(item, reveal=reveal))
        return 0

    for item in result:
        print(format_card(item, reveal=reveal))
        print()
    print(browser.count_text())
    return 0
