"""Tests for the get/need/has accessors."""

import pytest

import retriever
from retriever import MISSING, EventKind, Retriever
from retriever.config import RETRIEVER_CONFIG

BASIC = {
    "a": {
        "b": {
            "c": 0,
            "d": None,
            "e": MISSING,
            "f": False,
        }
    }
}
WITH_ARRAYS = {"a": {"b": [{"c": "test"}]}}
NESTED_ARRAYS = {"a": [{"b": ["x", "y"]}]}
EMPTY_DEFAULT = {"__isEmpty": True}


class PrototypeDict(dict):
    prototype_property = 1


@pytest.fixture(params=["need", "get"])
def accessor(request, retriever_diagnostics):
    return getattr(retriever, request.param)


def test_gets_simple_value(accessor) -> None:
    assert accessor(BASIC, "a.b.c", 1) == 0


def test_accesses_array_elements(accessor) -> None:
    assert accessor(WITH_ARRAYS, "a.b[0].c") == "test"


def test_accesses_nested_array_elements(accessor) -> None:
    assert accessor(NESTED_ARRAYS, "a[0].b[1]") == "y"


def test_gets_object_value(accessor) -> None:
    assert accessor(BASIC, "a.b", {}) is BASIC["a"]["b"]


def test_uses_default_under_type_mismatch(accessor) -> None:
    assert accessor(BASIC, "a.b.c", "1") == "1"


def test_uses_default_for_null_value(accessor) -> None:
    assert accessor(BASIC, "a.b.d", "default") == "default"


def test_assumes_empty_string_default(accessor) -> None:
    assert accessor(BASIC, "a.b.d") == ""
    assert accessor(BASIC, "a.b.e") == ""


def test_defaults_to_array_when_result_is_object(accessor) -> None:
    assert accessor(BASIC, "a.b", []) == []


def test_defaults_to_non_empty_object_for_null(accessor) -> None:
    assert accessor(BASIC, "a.b.d", {"a": 1}) == {"a": 1}


def test_defaults_to_sentinel_for_empty_object(accessor) -> None:
    assert accessor(BASIC, "a.b.d", {}) == EMPTY_DEFAULT


def test_defaults_to_sentinel_for_empty_object_with_class_attributes(accessor) -> None:
    assert accessor(BASIC, "a.b.d", PrototypeDict()) == EMPTY_DEFAULT


def test_defaults_when_value_is_missing(accessor) -> None:
    assert accessor(BASIC, "a.b.e", "default") == "default"


def test_accepts_sequence_paths(accessor) -> None:
    assert accessor(WITH_ARRAYS, ["a", "b", 0, "c"]) == "test"


def test_access_reports_event_kinds(retriever_diagnostics) -> None:
    assert retriever.access(BASIC, "a.b.c", 1).event is EventKind.NONE
    assert retriever.access(BASIC, "a.b.c", "1").event is EventKind.TYPE_MISMATCH
    assert retriever.access(BASIC, "a.b.d", "default").event is EventKind.TYPE_MISMATCH
    assert retriever.access(BASIC, "a.b.e").event is EventKind.DATA_MISSING
    assert retriever.access(BASIC, "x.y.z", 5).event is EventKind.DATA_MISSING


def test_first_index_only_config_limits_bracket_rewrite(retriever_diagnostics) -> None:
    RETRIEVER_CONFIG.first_index_only = True

    assert retriever.get(NESTED_ARRAYS, "a[0].b[1]", "fallback") == "fallback"
    assert retriever.get(WITH_ARRAYS, "a.b[0].c") == "test"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("a", True),
        ("x", False),
        ("a.b.c", True),
        ("a.b.x", False),
        ("a.b.d", False),
        ("a.b.e", False),
        ("a.b.f", True),
    ],
)
def test_has(path, expected, retriever_diagnostics) -> None:
    assert retriever.has(BASIC, path) is expected


def test_retriever_instances_are_independent(recording_sink) -> None:
    first = Retriever()
    second = Retriever()
    first.start_logging(recording_sink)

    second.need(BASIC, "missingKey")
    first.need(BASIC, "missingKey")

    assert first.diagnostics.stats.data_missing == 1
    assert second.diagnostics.stats.total == 0


def test_documented_scenarios(recording_sink) -> None:
    """Pin the behaviour of the reference lookups, events included."""

    reader = Retriever()
    reader.set_logger(recording_sink)

    assert reader.need(BASIC, "a.b.c", 1) == 0
    assert reader.need(BASIC, "a.b.c", "1") == "1"
    assert reader.need(BASIC, "a.b.d", "default") == "default"
    assert reader.need(BASIC, "a.b.e") == ""
    assert reader.has(BASIC, "a.b.f") is True
    assert reader.has(BASIC, "a.b.d") is False

    assert recording_sink.messages == [
        'event: typeMismatch, path: a.b.c, default: "1"',
        'event: typeMismatch, path: a.b.d, default: "default"',
        'event: dataMissing, path: a.b.e, default: ""',
    ]


def test_path_may_start_with_index(retriever_diagnostics) -> None:
    result = retriever.access([{"a": "x"}], "[0].a")

    assert result.value == "x"
    assert result.event is EventKind.NONE
