"""
Tests for dotted-term nesting used by the nested JSON and YAML exporters.

A prefix that is both a leaf and a branch must not lose either record.
"""

import pytest

from termpush.document import TranslationDocument, TranslationRecord
from termpush.exporters import ExporterRegistry
from termpush.exporters.nesting import flatten, nest


def records(*pairs):
    return [TranslationRecord(term, value) for term, value in pairs]


def test_nest_builds_branches():
    assert nest(records(("a.b.c", "1"), ("a.b.d", "2"), ("e", "3"))) == {
        "a": {"b": {"c": "1", "d": "2"}},
        "e": "3",
    }


def test_leaf_then_branch_keeps_branch_flat():
    nested = nest(records(("a", "A"), ("a.b", "B")))

    assert nested == {"a": "A", "a.b": "B"}


def test_branch_then_leaf_hoists_branch_entries():
    nested = nest(records(("a.b", "B"), ("a.c.d", "D"), ("a", "A")))

    assert nested == {"a.b": "B", "a.c.d": "D", "a": "A"}


def test_collision_below_top_level():
    nested = nest(records(("x.y", "Y"), ("x.y.z", "Z"), ("x.w", "W")))

    assert nested == {"x": {"y": "Y", "y.z": "Z", "w": "W"}}


@pytest.mark.parametrize("pairs", [
    [("a", "A"), ("a.b", "B")],
    [("a.b", "B"), ("a", "A")],
    [("x.y", "Y"), ("x.y.z", "Z"), ("x.w", "W")],
    [("a.b.c", "C"), ("a.b", "B"), ("a", "A")],
])
def test_flatten_restores_every_term(pairs):
    assert sorted(flatten(nest(records(*pairs)))) == sorted(pairs)


def test_empty_segments_are_preserved():
    pairs = [("a..b", "1"), (".lead", "2"), ("trail.", "3")]

    assert sorted(flatten(nest(records(*pairs)))) == sorted(pairs)


def test_flatten_lists_use_indices():
    assert flatten({"menu": ["Open", "Close"]}) == [("menu.0", "Open"), ("menu.1", "Close")]


@pytest.mark.parametrize("format_id", ["jsonnested", "yamlnested"])
def test_nested_formats_round_trip_colliding_terms(format_id):
    exporter = ExporterRegistry.get(format_id)
    document = TranslationDocument.from_pairs("en", [
        ("errors", "Something went wrong"),
        ("errors.network", "Network error"),
        ("errors.network.timeout", "Timed out"),
        ("user.name", "Name"),
    ])

    parsed = exporter.parse(exporter.export(document), iso="en")

    assert parsed.as_dict() == document.as_dict()
