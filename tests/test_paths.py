"""Tests for path normalization and traversal."""

import pytest

from retriever.paths import MISSING, normalize, render, traverse


def test_normalize_splits_dotted_path() -> None:
    assert normalize("a.b.c") == ("a", "b", "c")


def test_normalize_splices_bracketed_index() -> None:
    """Bracketed indices should become their own segments."""

    assert normalize("a.b[0].c") == ("a", "b", "0", "c")
    assert normalize("items[12]") == ("items", "12")


def test_normalize_rewrites_every_bracket_group() -> None:
    """All bracket groups are rewritten, at any nesting level."""

    assert normalize("a[0].b[1]") == ("a", "0", "b", "1")
    assert normalize("a[0][1].c") == ("a", "0", "1", "c")


def test_normalize_first_index_only_keeps_later_groups_in_key() -> None:
    """The legacy single-pass rewrite only splices the first bracket group."""

    assert normalize("a[0].b[1]", first_index_only=True) == ("a", "0", "b[1]")


def test_normalize_passes_sequences_through() -> None:
    assert normalize(["a", 0, "c"]) == ("a", 0, "c")
    assert normalize(("a", "b")) == ("a", "b")


@pytest.mark.parametrize("path", ["a.b[0].c", "a[0][1]", "[0].a", "x..y", "", ["a", 1]])
def test_normalize_is_idempotent(path) -> None:
    once = normalize(path)
    assert normalize(once) == once


def test_normalize_leading_bracket_group_starts_the_path() -> None:
    """A leading index must not open the path with an empty key."""

    assert normalize("[0].a") == ("0", "a")
    assert normalize("[0][1]") == ("0", "1")
    assert normalize(normalize("[0].a")) == ("0", "a")
    assert traverse([{"a": "x"}], normalize("[0].a")) == "x"


def test_normalize_preserves_empty_segments() -> None:
    assert normalize("a..b") == ("a", "", "b")
    assert normalize("") == ("",)


def test_normalize_wraps_scalar_paths() -> None:
    assert normalize(3) == (3,)


def test_render_joins_sequences_with_dots() -> None:
    assert render("a.b[0]") == "a.b[0]"
    assert render(["a", 0, "c"]) == "a.0.c"


def test_traverse_walks_nested_mappings() -> None:
    doc = {"config": {"dataset": {"name": "mnist", "size": 128}}}

    assert traverse(doc, normalize("config.dataset.name")) == "mnist"
    assert traverse(doc, normalize("config.dataset.size")) == 128


def test_traverse_indexes_lists_and_tuples() -> None:
    doc = {"deps": [{"name": "a"}, {"name": "b"}], "pair": (1, 2)}

    assert traverse(doc, normalize("deps[1].name")) == "b"
    assert traverse(doc, ("deps", 0)) == {"name": "a"}
    assert traverse(doc, normalize("pair.1")) == 2


def test_traverse_returns_missing_for_absent_segments() -> None:
    doc = {"config": {"seed": 42}}

    assert traverse(doc, normalize("config.missing")) is MISSING
    assert traverse(doc, normalize("config.seed.unit")) is MISSING
    assert traverse(doc, normalize("nope.deeper.still")) is MISSING


def test_traverse_returns_missing_for_invalid_index() -> None:
    doc = {"values": [10, 20]}

    assert traverse(doc, normalize("values.two")) is MISSING
    assert traverse(doc, normalize("values.10")) is MISSING
    assert traverse(doc, ("values", -1)) is MISSING


def test_traverse_does_not_index_into_strings() -> None:
    assert traverse({"name": "abc"}, normalize("name.0")) is MISSING


def test_traverse_tolerates_non_container_roots() -> None:
    assert traverse(None, normalize("a")) is MISSING
    assert traverse(42, normalize("a.b")) is MISSING
    assert traverse(MISSING, normalize("a")) is MISSING


def test_traverse_treats_stored_missing_as_absent() -> None:
    doc = {"a": {"e": MISSING}}

    assert traverse(doc, normalize("a.e")) is MISSING
    assert traverse(doc, normalize("a.e.f")) is MISSING


def test_traverse_keeps_none_and_falsy_leaves() -> None:
    doc = {"a": {"d": None, "f": False, "c": 0}}

    assert traverse(doc, normalize("a.d")) is None
    assert traverse(doc, normalize("a.f")) is False
    assert traverse(doc, normalize("a.c")) == 0


def test_traverse_matches_int_and_str_mapping_keys() -> None:
    doc = {1: "int-key", "2": "str-key"}

    assert traverse(doc, ("1",)) == "int-key"
    assert traverse(doc, (2,)) == "str-key"


def test_traverse_empty_path_returns_root() -> None:
    doc = {"a": 1}

    assert traverse(doc, ()) is doc
    assert traverse(doc, normalize("")) is MISSING
