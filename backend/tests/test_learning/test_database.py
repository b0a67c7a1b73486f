"""Tests for the living database and its text snapshots."""

import pytest

from glyphsight.learning.database import LivingDataUnit, QuickTrace
from glyphsight.utils.math_helpers import Vector2
from tests.conftest import make_definition


def test_add_definition_indexes_every_step(dictionary):
    unit = LivingDataUnit.from_definitions(dictionary)
    assert len(unit.trace_groups) == 2
    first = unit.trace_groups[0].group_content
    assert [q.id for q in first] == ["A", "B"]
    assert first[0] == QuickTrace("A", Vector2(2, 0), Vector2(1, 0))


def test_groups_grow_with_longer_definitions(dictionary):
    unit = LivingDataUnit.from_definitions(dictionary)
    unit.add_definition(make_definition("C", 5, (0, [0, 1]), (1, [5, 6]), (2, [10, 11])))
    assert len(unit.trace_groups) == 3
    assert [q.id for q in unit.trace_groups[2].group_content] == ["C"]


def test_get_definition(dictionary):
    unit = LivingDataUnit.from_definitions(dictionary)
    assert unit.get_definition("B") is dictionary[1]
    assert unit.get_definition("Z") is None


def test_dump_writes_both_snapshots(tmp_path, dictionary):
    quick_path, heavy_path = LivingDataUnit.from_definitions(dictionary).dump_to_file(tmp_path, "letters")
    assert quick_path.name == "quickaccess_letters"
    assert heavy_path.name == "heavyaccess_letters"
    assert heavy_path.read_text().splitlines() == ["A.1,2,3;10,15,20;", "B.5,10,15;1,2,3;"]
    assert quick_path.read_text().splitlines() == [
        "A.2,0,1,0,.B.0,2,0,1,.",
        "A.0,2,0,1,.B.2,0,1,0,.",
    ]


def test_dump_then_load(tmp_path, dictionary):
    quick_path, heavy_path = LivingDataUnit.from_definitions(dictionary).dump_to_file(tmp_path, "letters")

    loaded = LivingDataUnit()
    assert loaded.load_from_file(quick_path, heavy_path, 5)
    assert loaded.definitions == dictionary
    assert loaded.trace_groups == LivingDataUnit.from_definitions(dictionary).trace_groups


def test_load_detects_tampered_quick_index(tmp_path, dictionary):
    quick_path, heavy_path = LivingDataUnit.from_definitions(dictionary).dump_to_file(tmp_path, "letters")
    quick_path.write_text(quick_path.read_text().replace("A.2,0,1,0,", "A.2,0,0,0,", 1))

    assert not LivingDataUnit().load_from_file(quick_path, heavy_path, 5)


def test_load_detects_missing_time_step(tmp_path, dictionary):
    quick_path, heavy_path = LivingDataUnit.from_definitions(dictionary).dump_to_file(tmp_path, "letters")
    quick_path.write_text(quick_path.read_text().splitlines()[0] + "\n")

    assert not LivingDataUnit().load_from_file(quick_path, heavy_path, 5)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        LivingDataUnit().load_from_file(tmp_path / "quick", tmp_path / "heavy", 5)


def test_groups_follow_time_stamps():
    unit = LivingDataUnit.from_definitions([make_definition("G", 5, (0, [1, 2]), (2, [10, 15]))])
    assert len(unit.trace_groups) == 3
    assert unit.trace_groups[1].group_content == []
    assert [q.id for q in unit.trace_groups[2].group_content] == ["G"]


def test_dump_then_load_keeps_skipped_time_steps(tmp_path):
    definition = make_definition("G", 5, (0, [1, 2]), (2, [10, 15]))
    quick_path, heavy_path = LivingDataUnit.from_definitions([definition]).dump_to_file(tmp_path, "gap")
    assert heavy_path.read_text() == "G.1,2;;10,15;\n"

    loaded = LivingDataUnit()
    assert loaded.load_from_file(quick_path, heavy_path, 5)
    assert [t.time_stamp for t in loaded.definitions[0].traces] == [0, 2]
    assert loaded.trace_groups == LivingDataUnit.from_definitions([definition]).trace_groups


def test_dump_rejects_id_with_separator(tmp_path):
    unit = LivingDataUnit.from_definitions([make_definition("v1.2", 5, (0, [1, 2, 3]))])
    with pytest.raises(ValueError, match="v1.2"):
        unit.dump_to_file(tmp_path / "snapshots", "bad")
    assert not (tmp_path / "snapshots").exists()


def test_load_malformed_quick_line_returns_false(tmp_path, dictionary):
    quick_path = tmp_path / "quickaccess_bad"
    heavy_path = tmp_path / "heavyaccess_bad"
    quick_path.write_text("v1.2.2,0,1,0,.\n")
    heavy_path.write_text("v1.2.1,2,3;\n")

    unit = LivingDataUnit.from_definitions(dictionary)
    assert not unit.load_from_file(quick_path, heavy_path, 5)
    assert unit.definitions == dictionary


def test_load_index_outside_grid_returns_false(tmp_path):
    quick_path = tmp_path / "quickaccess_wide"
    heavy_path = tmp_path / "heavyaccess_wide"
    quick_path.write_text("A.2,0,1,0,.\n")
    heavy_path.write_text("A.1,2,30;\n")

    assert not LivingDataUnit().load_from_file(quick_path, heavy_path, 5)
