"""Tests for report rendering."""

import io
from pathlib import Path

from rich.console import Console

from shim_api.validator import PackageReference, UnitReport, format_results, format_tap, summarize
from shim_api.validator.types import Outcome


def make_report() -> UnitReport:
    report = UnitReport(reference=PackageReference(name="pkg", directory=Path("pkg")))
    report.add_pass("module is callable")
    report.add_skip("shim returns polyfill", reason="shim return value not checked")
    report.add_fail("shim is callable", details="shim is NoneType")
    return report


class TestSummarize:
    def test_counts_per_outcome(self):
        counts = summarize([make_report(), make_report()])

        assert counts == {Outcome.PASS: 2, Outcome.FAIL: 2, Outcome.SKIP: 2}


class TestFormatTap:
    """Tests for the TAP renderer."""

    def test_numbering_and_directives(self):
        lines = format_tap([make_report()]).splitlines()

        assert lines[0] == "TAP version 13"
        assert lines[1] == "# shim-api : testing module: pkg"
        assert lines[2] == "ok 1 module is callable"
        assert lines[3] == "ok 2 shim returns polyfill # SKIP shim return value not checked"
        assert lines[4] == "not ok 3 shim is callable"
        assert "    details: 'shim is NoneType'" in lines
        assert "1..3" in lines
        assert "# fail  1" in lines

    def test_hash_in_description_is_escaped(self):
        """A `#` in a description or reason is not read as a directive."""
        report = UnitReport(reference=PackageReference(name="pkg", directory=Path("pkg")))
        report.add_pass("issue #12 is fixed")
        report.add_skip("check #2", reason="see #3")
        report.add_fail("shim #1")

        lines = format_tap([report]).splitlines()

        assert "ok 1 issue \\#12 is fixed" in lines
        assert "ok 2 check \\#2 # SKIP see \\#3" in lines
        assert "not ok 3 shim \\#1" in lines

    def test_all_passing_ends_ok(self):
        report = UnitReport(reference=PackageReference(name="pkg", directory=Path("pkg")))
        report.add_pass("expected no error")

        assert format_tap([report]).endswith("# ok\n")


class TestFormatResults:
    def test_summary_line(self):
        buffer = io.StringIO()
        console = Console(file=buffer, width=200, color_system=None)

        format_results([make_report()], console)

        output = buffer.getvalue()
        assert "shim is NoneType" in output
        assert "1 failed, 1 passed, 1 skipped" in output
