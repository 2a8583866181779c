"""Packaging correctness verification for xml-metrics.

Tests validate:
- Top-level import exposes the documented public API
- py.typed marker ships with the package
- Installed distribution metadata matches the package version
"""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestPublicSurface:
    def test_all_exports(self):  # type: ignore[no-untyped-def]
        """__all__ must include the documented public API."""
        import xml_metrics

        expected = {
            "InputError",
            "MergeStrategy",
            "Metric",
            "NoMetricError",
            "ParserConfig",
            "QueryCompileError",
            "QueryResolutionError",
            "RecordConstructionError",
            "XMLMetricsError",
            "XMLParser",
            "parse",
            "parse_line",
        }
        actual = set(xml_metrics.__all__)
        assert expected == actual, (
            f"Missing: {expected - actual}, Extra: {actual - expected}"
        )

    def test_every_export_resolves(self):  # type: ignore[no-untyped-def]
        import xml_metrics

        for name in xml_metrics.__all__:
            assert hasattr(xml_metrics, name), name

    def test_error_hierarchy(self):  # type: ignore[no-untyped-def]
        import xml_metrics

        for name in (
            "InputError",
            "NoMetricError",
            "QueryCompileError",
            "QueryResolutionError",
            "RecordConstructionError",
        ):
            assert issubclass(getattr(xml_metrics, name), xml_metrics.XMLMetricsError)


class TestPackageFiles:
    def test_py_typed_marker(self):  # type: ignore[no-untyped-def]
        """py.typed marker must live next to the package sources."""
        import xml_metrics

        package_dir = Path(xml_metrics.__file__).parent
        assert (package_dir / "py.typed").exists()

    def test_pyproject_present(self):  # type: ignore[no-untyped-def]
        assert (PROJECT_ROOT / "pyproject.toml").exists()


class TestPackageMetadata:
    def test_version(self):  # type: ignore[no-untyped-def]
        import xml_metrics

        try:
            installed = metadata.version("xml-metrics")
        except metadata.PackageNotFoundError:
            pytest.skip("xml-metrics is not installed")
        assert installed == xml_metrics.__version__
