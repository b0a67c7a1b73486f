"""Tests for aligning split strokes to a base definition."""

from glyphsight.learning.reconstruction import Choice, TraceLikeness, choose_alignment, reconstruct_traces
from glyphsight.models.definition import Trace
from tests.conftest import make_definition


def _likeness(trace_cos: float, offset_cos: float, gap: int) -> TraceLikeness:
    return TraceLikeness(trace_cos=trace_cos, offset_cos=offset_cos, length_gap=gap)


def test_likeness_between_identical_traces():
    trace = Trace.new(0, [5, 11, 17, 23], 5)
    likeness = TraceLikeness.between(trace, trace)
    assert likeness.passes
    assert likeness.length_gap == 0


def test_both_passing_prefers_closer_length():
    assert choose_alignment(_likeness(1, 1, 2), _likeness(0.9, 0.9, 0)) == (Choice.MERGED, True)
    assert choose_alignment(_likeness(1, 1, 1), _likeness(0.9, 0.9, 1)) == (Choice.SINGLE, True)


def test_closer_merged_wins_when_single_fails():
    assert choose_alignment(_likeness(1, -2, 2), _likeness(1, 1, 0)) == (Choice.MERGED, True)


def test_vote_picks_merged_on_two_signals():
    choice, accepted = choose_alignment(_likeness(0.5, 0.5, 0), _likeness(0.7, 0.7, 1))
    assert choice is Choice.MERGED
    assert not accepted


def test_vote_keeps_single_otherwise():
    choice, accepted = choose_alignment(_likeness(0.9, 0.9, 0), _likeness(0.95, 0.1, 1))
    assert choice is Choice.SINGLE
    assert accepted


def test_reconstruct_merges_split_stroke(base_definition, instances):
    result = reconstruct_traces(base_definition, instances[2])
    assert result.success
    assert [t.indexes for t in result.instance.traces] == [[1, 2, 3], [10, 15, 20], [5, 11, 17, 23]]
    assert any("merged" in line for line in result.log)


def test_reconstruct_merges_in_the_middle(base_definition, instances):
    result = reconstruct_traces(base_definition, instances[7])
    assert result.success
    assert result.instance.traces[1].indexes == [10, 15, 20]
    assert result.instance.traces[1].time_stamp == 1
    assert result.instance.traces[2].time_stamp == 3


def test_reconstruct_fails_when_candidates_run_out(base_definition):
    candidate = make_definition("sample", 5, (0, [1, 2]), (0, [3]), (1, [10, 15]), (1, [20]))
    result = reconstruct_traces(base_definition, candidate)
    assert not result.success
    assert len(result.instance.traces) == 2
    assert result.log[-1] == "produced 2 of 3 traces"


def test_reconstruct_logs_leftovers(base_definition):
    candidate = make_definition(
        "sample", 5, (0, [1, 2, 3]), (1, [10, 15, 20]), (2, [5, 11, 17, 23]), (3, [0, 1])
    )
    result = reconstruct_traces(base_definition, candidate)
    assert result.success
    assert "dropped 1 leftover traces" in result.log
