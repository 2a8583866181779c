"""Tests for the public API functions parse() and parse_line()."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from xml_metrics import (
    NoMetricError,
    ParserConfig,
    QueryResolutionError,
    XMLParser,
    parse,
    parse_line,
)

TS = datetime(2021, 3, 1, tzinfo=timezone.utc)

DOC = b"""<weather station="ams">
  <reading kind="temp" value="12.5"/>
  <reading kind="humidity" value="81"/>
</weather>"""


class TestParse:
    def test_default_config_selects_every_element(self) -> None:
        metrics = parse(DOC, timestamp=TS)
        assert len(metrics) == 3
        assert metrics[0].fields == {"station": "ams"}

    def test_with_config(self) -> None:
        config = ParserConfig(metric_name="weather", query="//reading", tag_keys={"kind"})
        metrics = parse(DOC, config, TS)
        assert [(m.tags, m.fields) for m in metrics] == [
            ({"kind": "temp"}, {"value": 12.5}),
            ({"kind": "humidity"}, {"value": 81}),
        ]

    def test_matches_parser_instance(self) -> None:
        config = ParserConfig(query="//reading", array=True)
        assert parse(DOC, config, TS) == XMLParser(config).parse(DOC, TS)

    def test_dynamic_name_error(self) -> None:
        config = ParserConfig(query="//reading", measurement="/weather/@missing")
        with pytest.raises(QueryResolutionError):
            parse(DOC, config, TS)


class TestParseLine:
    def test_head_of_parse(self) -> None:
        config = ParserConfig(query="//reading", measurement="/weather/@station")
        metric = parse_line(DOC.decode(), config, TS)
        assert metric == parse(DOC, config, TS)[0]
        assert metric.name == "ams"

    def test_no_metric(self) -> None:
        with pytest.raises(NoMetricError):
            parse_line(DOC.decode(), ParserConfig(query="//none"), TS)
