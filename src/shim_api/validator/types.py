"""
Shared types for the validator module.

This module exists to avoid circular imports between core.py, multi.py and probe.py.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Outcome(Enum):
    """Outcome of a single assertion."""
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


@dataclass(frozen=True)
class Assertion:
    """A single named check result."""
    description: str
    outcome: Outcome
    reason: str | None = None
    details: str | None = None


@dataclass(frozen=True)
class PackageReference:
    """
    A module to validate.

    Attributes:
        name: Dotted module name or filesystem path that gets loaded
        directory: Where companion modules and sub-packages live
        label: Display name used in reports (defaults to name)
    """
    name: str
    directory: Path
    label: str | None = None

    @property
    def display_name(self) -> str:
        return self.label or self.name


@dataclass
class PackageTree:
    """A multi-package root and its declared sub-package names, in order."""
    root: PackageReference
    children: list[str] = field(default_factory=list)

    def child_reference(self, name: str, base_dir: Path | None = None) -> PackageReference:
        directory = (base_dir or self.root.directory) / name
        return PackageReference(name=str(directory), directory=directory, label=name)


@dataclass
class UnitReport:
    """Ordered assertions produced while validating one package reference."""
    reference: PackageReference
    assertions: list[Assertion] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.reference.display_name

    @property
    def failures(self) -> list[Assertion]:
        return [a for a in self.assertions if a.outcome == Outcome.FAIL]

    @property
    def skips(self) -> list[Assertion]:
        return [a for a in self.assertions if a.outcome == Outcome.SKIP]

    @property
    def has_failures(self) -> bool:
        return any(a.outcome == Outcome.FAIL for a in self.assertions)

    def add(self, assertion: Assertion) -> None:
        self.assertions.append(assertion)

    def add_pass(self, description: str) -> None:
        self.add(Assertion(description=description, outcome=Outcome.PASS))

    def add_fail(self, description: str, details: str | None = None) -> None:
        self.add(Assertion(description=description, outcome=Outcome.FAIL, details=details))

    def add_skip(self, description: str, reason: str) -> None:
        self.add(Assertion(description=description, outcome=Outcome.SKIP, reason=reason))

    def check(self, description: str, condition: bool, details: str | None = None) -> bool:
        """Record a pass or a fail depending on `condition`; returns `condition`."""
        if condition:
            self.add_pass(description)
        else:
            self.add_fail(description, details)
        return condition

    def find(self, description: str) -> Assertion | None:
        for a in self.assertions:
            if a.description == description:
                return a
        return None
