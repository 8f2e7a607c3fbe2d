"""Tests for candidate evaluation: stdlib/local/existing filtering and remapping."""

from detection.evaluator import DependencyEvaluator
from detection.irregulars import IRREGULARS, remap_table
from detection.stdlib import STDLIB_MODULES
from versioning.parser import parse_specifier


class TestDependencyEvaluator:
    """Filtering order and remapping behaviour."""

    def test_excludes_stdlib(self):
        res = DependencyEvaluator().evaluate({"os", "json", "__future__"}, set(), set())
        assert res == set()

    def test_excludes_local_package(self):
        res = DependencyEvaluator().evaluate({"mymod"}, set(), {"mymod"})
        assert res == set()

    def test_excludes_existing_packages_case_insensitively(self):
        res = DependencyEvaluator().evaluate({"django"}, {parse_specifier("Django~=4.2")}, set())
        assert res == set()

    def test_remaps_irregular(self):
        res = DependencyEvaluator().evaluate({"AFQ"}, set(), set())
        assert len(res) == 1
        (dep,) = res
        assert dep.name == "pyAFQ"
        assert dep.version_spec is None

    def test_remaps_extra_irregulars(self):
        evaluator = DependencyEvaluator({"thingtoremap": "ThingToRemap"})
        res = evaluator.evaluate({"thingtoremap"}, set(), set())
        assert len(res) == 1
        assert next(iter(res)).name == "ThingToRemap"

    def test_override_wins_over_builtin(self):
        evaluator = DependencyEvaluator({"yaml": "ruamel.yaml"})
        (dep,) = evaluator.evaluate({"yaml"}, set(), set())
        assert dep.name == "ruamel.yaml"

    def test_existing_filter_runs_after_remap(self):
        existing = {parse_specifier("djangorestframework>=3.14")}
        res = DependencyEvaluator().evaluate({"rest_framework"}, existing, set())
        assert res == set()

    def test_stdlib_checked_before_remap(self):
        # A remap entry for a stdlib name never reintroduces it.
        evaluator = DependencyEvaluator({"json": "simplejson"})
        assert evaluator.evaluate({"json"}, set(), set()) == set()

    def test_local_checked_before_remap(self):
        assert DependencyEvaluator().evaluate({"yaml"}, set(), {"yaml"}) == set()

    def test_unmapped_passes_through(self):
        res = DependencyEvaluator().evaluate({"requests", "os", "mymod"}, set(), {"mymod"})
        assert {d.name for d in res} == {"requests"}


class TestStaticTables:
    """The built-in tables are read-only lookups."""

    def test_stdlib_contents(self):
        assert {"os", "sys", "__future__"} <= STDLIB_MODULES
        assert "requests" not in STDLIB_MODULES
        assert isinstance(STDLIB_MODULES, frozenset)

    def test_irregulars_read_only(self):
        assert IRREGULARS["AFQ"] == "pyAFQ"
        assert IRREGULARS["rest_framework"] == "djangorestframework"
        try:
            IRREGULARS["new"] = "value"  # type: ignore[index]
        except TypeError:
            pass
        assert "new" not in IRREGULARS

    def test_remap_table_does_not_mutate_builtin(self):
        merged = remap_table({"AFQ": "something-else", "extra": "Extra"})
        assert merged["AFQ"] == "something-else"
        assert merged["extra"] == "Extra"
        assert IRREGULARS["AFQ"] == "pyAFQ"
        assert "extra" not in IRREGULARS
