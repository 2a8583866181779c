"""Tests for Metric frozen dataclass and its validating constructor."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from xml_metrics.errors import RecordConstructionError, XMLMetricsError
from xml_metrics.metric import Metric

TS = datetime(2021, 3, 1, tzinfo=timezone.utc)


class TestMetricCreate:
    def test_fields_populated(self) -> None:
        metric = Metric.create("cpu", {"host": "a"}, {"load": 0.5, "n": 2, "up": True}, TS)
        assert metric.name == "cpu"
        assert metric.tags == {"host": "a"}
        assert metric.fields == {"load": 0.5, "n": 2, "up": True}
        assert metric.time == TS

    def test_maps_are_copied(self) -> None:
        tags = {"host": "a"}
        fields: dict[str, int | float | bool | str] = {"n": 1}
        metric = Metric.create("cpu", tags, fields, TS)
        tags["host"] = "b"
        fields["n"] = 2
        assert metric.tags == {"host": "a"}
        assert metric.fields == {"n": 1}

    def test_empty_maps_allowed(self) -> None:
        assert Metric.create("cpu", {}, {}, TS).fields == {}

    def test_frozen(self) -> None:
        metric = Metric.create("cpu", {}, {}, TS)
        with pytest.raises(FrozenInstanceError):
            metric.name = "mem"  # type: ignore[misc]

    def test_tags_read_only(self) -> None:
        metric = Metric.create("cpu", {"host": "a"}, {}, TS)
        with pytest.raises(TypeError):
            metric.tags["host"] = "b"  # type: ignore[index]

    def test_fields_read_only(self) -> None:
        metric = Metric.create("cpu", {}, {"n": 1}, TS)
        with pytest.raises(TypeError):
            metric.fields["n"] = 2  # type: ignore[index]

    def test_direct_construction_copies_maps(self) -> None:
        tags = {"host": "a"}
        metric = Metric("cpu", tags, {}, TS)
        tags["host"] = "b"
        assert metric.tags == {"host": "a"}

    def test_hashable(self) -> None:
        first = Metric.create("cpu", {"a": "b"}, {"x": 1}, TS)
        second = Metric.create("cpu", {"a": "b"}, {"x": 1}, TS)
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_equality(self) -> None:
        assert Metric.create("cpu", {"a": "b"}, {"x": 1}, TS) == Metric.create(
            "cpu", {"a": "b"}, {"x": 1}, TS
        )


class TestMetricValidation:
    def test_empty_name(self) -> None:
        with pytest.raises(RecordConstructionError, match="non-empty"):
            Metric.create("", {}, {}, TS)

    def test_non_string_tag_value(self) -> None:
        with pytest.raises(RecordConstructionError, match="tag"):
            Metric.create("cpu", {"a": 1}, {}, TS)  # type: ignore[dict-item]

    def test_unsupported_field_type(self) -> None:
        with pytest.raises(RecordConstructionError, match="unsupported type"):
            Metric.create("cpu", {}, {"a": [1]}, TS)  # type: ignore[dict-item]

    def test_non_string_field_key(self) -> None:
        with pytest.raises(RecordConstructionError, match="field key"):
            Metric.create("cpu", {}, {1: 1}, TS)  # type: ignore[dict-item]

    def test_is_library_error(self) -> None:
        assert issubclass(RecordConstructionError, XMLMetricsError)
