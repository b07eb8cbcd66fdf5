"""Tests for the QuestionBrowser orchestrator."""
import json
import pytest
from unittest.mock import MagicMock
from qa_browser.browser import QuestionBrowser
from qa_browser.facet_index import FacetIndex
from qa_browser.facet_state import FacetState
from qa_browser.item_store import ItemStore, ItemStoreLoadError


SAMPLE_RECORDS = [
    {
        "id": "Q2",
        "course": "Math",
        "topic": "Algebra",
        "subtopic": "Linear",
        "difficulty": "Easy",
        "question": {"content": "solve x"},
        "tags": [],
    },
    {
        "id": "Q1",
        "course": "Math",
        "topic": "Geometry",
        "subtopic": "Angles",
        "difficulty": "Hard",
        "question": {"content": "find angle"},
        "tags": ["triangle"],
    },
]


@pytest.fixture
def browser():
    b = QuestionBrowser()
    b.load_records(SAMPLE_RECORDS)
    return b


@pytest.fixture
def question_bank_file(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps(SAMPLE_RECORDS))
    return str(path)


# --- Load sequence ---

def test_load_sorts_and_indexes(browser):
    assert [item.item_id for item in browser.store] == ["Q1", "Q2"]
    assert browser.index.topics == ["Algebra", "Geometry"]
    assert browser.index.all_subtopics == ["Angles", "Linear"]
    assert browser.index.subtopics_for("Algebra") == ["Linear"]
    assert browser.index.subtopics_for("Geometry") == ["Angles"]


def test_initial_pass_shows_everything(browser):
    assert browser.result.ids() == ["Q1", "Q2"]
    assert browser.count_text() == "2 of 2 questions shown"
    assert browser.subtopic_options == ["Angles", "Linear"]


def test_load_from_file(question_bank_file):
    b = QuestionBrowser()
    result = b.load(question_bank_file)
    assert result.ids() == ["Q1", "Q2"]


def test_load_failure_propagates(tmp_path):
    b = QuestionBrowser()
    with pytest.raises(ItemStoreLoadError):
        b.load(str(tmp_path / "missing.json"))
    assert b.store.loaded is False


def test_events_before_load_return_empty():
    b = QuestionBrowser()
    assert b.set_query("anything").items == []
    assert b.set_topic("Algebra").items == []
    assert b.subtopic_options == []
    assert b.random_item() is None


def test_load_populates_index_once():
    index = MagicMock(spec=FacetIndex)
    index.subtopic_options.return_value = []
    b = QuestionBrowser(facet_index=index)
    b.load_records(SAMPLE_RECORDS)
    index.populate.assert_called_once_with(b.store)


# --- Topic -> subtopic dependency ---

def test_topic_narrows_subtopic_options(browser):
    browser.set_topic("Algebra")
    assert browser.subtopic_options == ["Linear"]


def test_clearing_topic_restores_all_subtopics(browser):
    browser.set_topic("Algebra")
    browser.set_topic("")
    assert browser.subtopic_options == ["Angles", "Linear"]


def test_topic_change_replaces_options(browser):
    browser.set_topic("Algebra")
    browser.set_topic("Geometry")
    assert browser.subtopic_options == ["Angles"]


def test_unknown_topic_offers_no_subtopics(browser):
    browser.set_topic("Calculus")
    assert browser.subtopic_options == []
    assert browser.result.items == []


def test_stale_subtopic_is_kept(browser):
    browser.set_subtopic("Angles")
    browser.set_topic("Algebra")
    assert browser.state.subtopic == "Angles"
    assert "Angles" not in browser.subtopic_options
    assert browser.result.items == []


# --- Filtering events ---

def test_example_scenario(browser):
    browser.set_topic("Algebra")
    assert browser.subtopic_options == ["Linear"]
    browser.set_topic("")
    browser.set_difficulty("Hard")
    result = browser.set_query("angle")
    assert result.ids() == ["Q1"]

    browser.reset_filters()
    result = browser.set_course("Math")
    assert result.ids() == ["Q1", "Q2"]


def test_clear_query(browser):
    browser.set_query("solve")
    assert browser.result.ids() == ["Q2"]
    browser.clear_query()
    assert browser.result.ids() == ["Q1", "Q2"]


def test_reset_filters(browser):
    browser.set_course("Math")
    browser.set_topic("Geometry")
    browser.set_query("angle")
    result = browser.reset_filters()
    assert browser.state.is_empty()
    assert browser.subtopic_options == ["Angles", "Linear"]
    assert result.ids() == ["Q1", "Q2"]


def test_none_values_clear_selection(browser):
    browser.set_course("Math")
    browser.set_course(None)
    assert browser.state.course == ""


def test_apply_state_routes_topic(browser):
    result = browser.apply_state(FacetState(topic="Geometry", query="ANGLE"))
    assert result.ids() == ["Q1"]
    assert browser.subtopic_options == ["Angles"]


def test_count_text_after_filter(browser):
    browser.set_difficulty("Easy")
    assert browser.count_text() == "1 of 2 questions shown"


def test_random_item_from_filtered(browser):
    browser.set_difficulty("Easy")
    rng = MagicMock()
    rng.choice.side_effect = lambda items: items[0]
    item = browser.random_item(rng)
    assert item.item_id == "Q2"
    rng.choice.assert_called_once()


def test_reload_rebuilds_facet_options():
    b = QuestionBrowser()
    b.load_records([{"id": "A", "topic": "Algebra", "subtopic": "Linear"}])
    first_index = b.index
    result = b.load_records([{"id": "B", "topic": "Biology", "subtopic": "Cells"}])
    assert b.index is not first_index
    assert b.index.topics == ["Biology"]
    assert b.subtopic_options == ["Cells"]
    assert result.ids() == ["B"]


def test_repopulating_same_load_is_noop(browser):
    before = browser.index.to_dict()
    assert browser.index.populate(browser.store) is False
    assert browser.index.to_dict() == before


def test_injected_empty_store_is_used():
    store = ItemStore()
    b = QuestionBrowser(item_store=store)
    b.load_records(SAMPLE_RECORDS)
    assert b.store is store
    assert len(store) == 2
