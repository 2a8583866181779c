"""Tests for merge_into() last-write-wins semantics."""

from __future__ import annotations

from xml_metrics.fields.merge import merge_into


class TestMergeInto:
    def test_later_value_wins(self) -> None:
        dst: dict[str, int] = {}
        merge_into(dst, {"a": 1})
        merge_into(dst, {"a": 2})
        assert dst == {"a": 2}

    def test_reverse_order_reverses_winner(self) -> None:
        dst: dict[str, int] = {}
        merge_into(dst, {"a": 2})
        merge_into(dst, {"a": 1})
        assert dst == {"a": 1}

    def test_returns_destination(self) -> None:
        dst = {"a": "x"}
        assert merge_into(dst, {"b": "y"}) is dst

    def test_never_removes_keys(self) -> None:
        dst = {"a": "x", "b": "y"}
        merge_into(dst, {})
        assert dst == {"a": "x", "b": "y"}

    def test_source_untouched(self) -> None:
        src = {"a": 1}
        merge_into({"a": 0, "b": 2}, src)
        assert src == {"a": 1}

    def test_insertion_order_of_new_keys(self) -> None:
        dst = {"z": 0}
        merge_into(dst, {"b": 1, "a": 2})
        assert list(dst) == ["z", "b", "a"]
