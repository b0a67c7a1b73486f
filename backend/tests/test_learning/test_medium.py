"""Tests for incremental prediction."""

import pytest

from glyphsight.learning.database import LivingDataUnit
from glyphsight.learning.medium import Medium, Prediction
from glyphsight.models.definition import Trace


@pytest.fixture
def medium(dictionary) -> Medium:
    return Medium(LivingDataUnit.from_definitions(dictionary))


def test_first_stroke_sets_predictions(medium):
    medium.feed_trace(Trace.new(0, [6, 7, 8], 5))
    assert medium.predictions == [Prediction("A", 2.0)]


def test_second_stroke_adds_up(medium):
    medium.feed_trace(Trace.new(0, [6, 7, 8], 5))
    medium.feed_trace(Trace.new(1, [11, 16, 21], 5))
    assert medium.current_best == "A"
    assert medium.get_list_of_predictions() == (["A"], [4.0])


def test_unknown_time_stamp_is_ignored(medium):
    medium.feed_trace(Trace.new(5, [6, 7, 8], 5))
    assert medium.predictions == []


def test_empty_trace_is_ignored(medium):
    medium.feed_trace(Trace.empty())
    assert medium.predictions == []


def test_new_ids_enter_with_power_of_likeness(medium):
    medium.predictions = [Prediction("B", 1.5)]
    medium.last_trace = Trace.new(1, [11, 16, 21], 5)
    medium.update_predictions([Prediction("A", 2.0), Prediction("B", 0.5)])
    assert medium.predictions == [Prediction("A", 2.0), Prediction("B", 2.0)]
    assert medium.current_best == "A"


def test_reset_search(medium):
    medium.feed_trace(Trace.new(0, [6, 7, 8], 5))
    medium.reset_search()
    assert medium.predictions == []
    assert medium.last_trace.time_stamp == -1
    assert medium.current_best is None


def test_predictions_ranked_best_first(medium):
    medium.predictions = [Prediction(str(i), float(i)) for i in range(15)]
    ids, values = medium.get_list_of_predictions()
    assert ids == [str(i) for i in range(14, 4, -1)]
    assert values[0] == 14.0
