"""Tests for multi-index version resolution."""

import json
from unittest.mock import patch

from registry.pypi.resolver import PackageIndexResolver
from versioning.parser import parse_specifier

HTML = {"Content-Type": "text/html"}


def _page(*filenames):
    return "".join(f'<a href="/files/{f}">{f}</a>' for f in filenames)


class TestIndexOrder:
    """Index list construction."""

    def test_default_only(self):
        assert PackageIndexResolver().indexes == ("https://pypi.org/simple",)

    def test_preferred_then_default_then_extras(self):
        resolver = PackageIndexResolver(
            ["https://extra-one.example/simple/", "https://extra-two.example/simple"],
            "https://preferred.example/simple",
        )
        assert resolver.indexes == (
            "https://preferred.example/simple",
            "https://pypi.org/simple",
            "https://extra-one.example/simple",
            "https://extra-two.example/simple",
        )

    def test_project_url(self):
        assert PackageIndexResolver.project_url("https://pypi.org/simple", "Flask_RESTful") == \
            "https://pypi.org/simple/flask-restful/"
        assert PackageIndexResolver.project_url("https://pypi.org/pypi", "Django") == \
            "https://pypi.org/pypi/django/json"


class TestResolve:
    """resolve() behaviour against mocked HTTP."""

    @patch("registry.pypi.resolver.robust_get")
    def test_pins_latest_with_compatible_release(self, mock_get):
        mock_get.return_value = (200, HTML, _page("requests-2.9.0.tar.gz", "requests-2.31.0.tar.gz"))

        resolved = PackageIndexResolver().resolve(parse_specifier("requests"))

        assert str(resolved) == "requests~=2.31.0"
        url = mock_get.call_args[0][0]
        assert url == "https://pypi.org/simple/requests/"

    @patch("registry.pypi.resolver.robust_get")
    def test_first_success_short_circuits(self, mock_get):
        mock_get.side_effect = [
            (200, HTML, _page("pkg-1.0.tar.gz")),
            (200, HTML, _page("pkg-9.0.tar.gz")),
        ]
        resolver = PackageIndexResolver(["https://extra.example/simple"])

        resolved = resolver.resolve(parse_specifier("pkg"))

        assert resolved.version_spec == ("~=", "1.0")
        assert mock_get.call_count == 1

    @patch("registry.pypi.resolver.robust_get")
    def test_falls_through_failed_indexes(self, mock_get):
        mock_get.side_effect = [
            (0, {}, "Request failed: connection refused"),
            (404, HTML, "Not Found"),
            (200, HTML, _page("pkg-0.3.tar.gz", "pkg-0.10.tar.gz")),
        ]
        resolver = PackageIndexResolver(
            ["https://extra.example/simple"], "https://preferred.example/simple"
        )

        resolved = resolver.resolve(parse_specifier("pkg"))

        assert resolved.version_spec == ("~=", "0.10")
        urls = [c[0][0] for c in mock_get.call_args_list]
        assert urls == [
            "https://preferred.example/simple/pkg/",
            "https://pypi.org/simple/pkg/",
            "https://extra.example/simple/pkg/",
        ]

    @patch("registry.pypi.resolver.robust_get")
    def test_index_without_versions_is_skipped(self, mock_get):
        mock_get.side_effect = [
            (200, HTML, _page("pkg-2.0b1.tar.gz", "pkg-2.0-py3-none-any.whl")),
            (200, {"content-type": "application/json"}, json.dumps({"info": {"version": "1.5"}})),
        ]
        resolver = PackageIndexResolver(["https://pypi.org/pypi"])

        resolved = resolver.resolve(parse_specifier("pkg"))

        assert str(resolved) == "pkg~=1.5"

    @patch("registry.pypi.resolver.robust_get")
    def test_unparsable_json_is_skipped(self, mock_get):
        mock_get.side_effect = [
            (200, {"Content-Type": "application/json"}, "{broken"),
            (200, HTML, _page("pkg-3.1.tar.gz")),
        ]
        resolver = PackageIndexResolver(["https://extra.example/simple"])

        assert str(resolver.resolve(parse_specifier("pkg"))) == "pkg~=3.1"

    @patch("registry.pypi.resolver.robust_get")
    def test_all_fail_returns_original(self, mock_get, caplog):
        mock_get.return_value = (500, HTML, "boom")
        original = parse_specifier("ghostpkg")

        with caplog.at_level("WARNING"):
            resolved = PackageIndexResolver(["https://extra.example/simple"]).resolve(original)

        assert resolved is original
        assert resolved.version_spec is None
        assert "Problem resolving package ghostpkg" in caplog.text

    @patch("registry.pypi.resolver.robust_get")
    def test_keeps_declared_name_case(self, mock_get):
        mock_get.return_value = (200, HTML, _page("pyafq-1.3.2.tar.gz"))

        resolved = PackageIndexResolver().resolve(parse_specifier("pyAFQ"))

        assert str(resolved) == "pyAFQ~=1.3.2"
        assert mock_get.call_args[0][0] == "https://pypi.org/simple/pyafq/"
