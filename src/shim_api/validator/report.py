"""
Rendering of validation reports.
"""

from rich.console import Console
from rich.markup import escape

from shim_api.validator.types import Outcome, UnitReport

UNIT_HEADER = "shim-api : testing module: {label}"


def tap_escape(text: str) -> str:
    """Escape `#` so it is not read as a TAP directive."""
    return text.replace("#", "\\#")


def summarize(reports: list[UnitReport]) -> dict[Outcome, int]:
    """Count assertions per outcome across all reports."""
    counts = {outcome: 0 for outcome in Outcome}
    for report in reports:
        for a in report.assertions:
            counts[a.outcome] += 1
    return counts


def format_results(reports: list[UnitReport], console: Console) -> None:
    """Format validation reports for display."""
    for report in reports:
        console.print(f"\n[bold]{escape(UNIT_HEADER.format(label=report.label))}[/bold]")

        for a in report.assertions:
            if a.outcome == Outcome.PASS:
                icon = "[green]✓[/green]"
            elif a.outcome == Outcome.FAIL:
                icon = "[red]✗[/red]"
            else:
                icon = "[yellow]-[/yellow]"

            line = f"{icon} {escape(a.description)}"
            if a.outcome == Outcome.SKIP:
                line += f" [yellow]SKIP[/yellow] [dim]{escape(a.reason or '')}[/dim]"
            console.print(line)

            if a.details and a.outcome == Outcome.FAIL:
                console.print(f"  [dim]{escape(a.details)}[/dim]")

    # Summary
    counts = summarize(reports)
    passed, failed, skipped = counts[Outcome.PASS], counts[Outcome.FAIL], counts[Outcome.SKIP]

    if failed > 0:
        console.print(f"\n[red]{failed} failed, {passed} passed, {skipped} skipped[/red]")
    elif skipped > 0:
        console.print(f"\n[green]{passed} passed[/green], [yellow]{skipped} skipped[/yellow]")
    else:
        console.print(f"\n[green]All {passed} checks passed[/green]")


def format_tap(reports: list[UnitReport]) -> str:
    """
    Render reports as TAP version 13.

    Failing assertions carry a YAML diagnostic block; skips use the
    `# SKIP` directive.
    """
    lines = ["TAP version 13"]
    number = 0

    for report in reports:
        lines.append(f"# {UNIT_HEADER.format(label=report.label)}")
        for a in report.assertions:
            number += 1
            if a.outcome == Outcome.FAIL:
                lines.append(f"not ok {number} {tap_escape(a.description)}")
                lines.append("  ---")
                lines.append(f"    message: {a.description!r}")
                if a.details:
                    lines.append(f"    details: {a.details!r}")
                lines.append("  ...")
            elif a.outcome == Outcome.SKIP:
                lines.append(f"ok {number} {tap_escape(a.description)} # SKIP {tap_escape(a.reason or '')}".rstrip())
            else:
                lines.append(f"ok {number} {tap_escape(a.description)}")

    counts = summarize(reports)
    lines.append(f"1..{number}")
    lines.append(f"# tests {number}")
    lines.append(f"# pass  {counts[Outcome.PASS]}")
    if counts[Outcome.SKIP]:
        lines.append(f"# skip  {counts[Outcome.SKIP]}")
    if counts[Outcome.FAIL]:
        lines.append(f"# fail  {counts[Outcome.FAIL]}")
    else:
        lines.append("")
        lines.append("# ok")
    return "\n".join(lines) + "\n"
