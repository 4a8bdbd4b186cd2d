"""
Flags that control which contract checks run.
"""

from dataclasses import dataclass, fields, replace
from typing import Any

# [tool.shim-api] keys mapped to ValidationConfiguration fields
TABLE_KEYS = {
    "bound": "bound_skip",
    "property": "property_skip",
    "skip-shim-returns-polyfill": "shim_returns_polyfill_skip",
    "skip-auto-shim": "auto_shim_skip",
    "multi": "multi_mode",
    "probe-timeout": "probe_timeout",
}


@dataclass(frozen=True)
class ValidationConfiguration:
    """
    Resolved once per run.

    Each skip flag turns exactly one check into a skip record; the check is
    still reported, never silently dropped.

    Attributes:
        bound_skip: Main export is a bound wrapper, so it cannot be get_polyfill()
        property_skip: implementation may be a plain data value
        shim_returns_polyfill_skip: Don't compare shim() with get_polyfill()
        auto_shim_skip: Don't load or probe the auto module
        multi_mode: The module is a multi-package root
        probe_timeout: Seconds before a probe child is killed (None waits forever)
    """
    bound_skip: bool = False
    property_skip: bool = False
    shim_returns_polyfill_skip: bool = False
    auto_shim_skip: bool = False
    multi_mode: bool = False
    probe_timeout: float | None = None

    @classmethod
    def from_table(cls, table: dict[str, Any]) -> "ValidationConfiguration":
        """
        Build a configuration from a `[tool.shim-api]` table.

        Unknown keys are rejected so typos don't silently enable checks.
        """
        values = {}
        for key, value in table.items():
            if key == "main":
                continue
            if key not in TABLE_KEYS:
                raise ValueError(f"Unknown [tool.shim-api] setting: {key}")
            field_name = TABLE_KEYS[key]
            if field_name == "probe_timeout":
                values[field_name] = None if value is None else float(value)
            else:
                if not isinstance(value, bool):
                    raise ValueError(f"[tool.shim-api] {key} must be true or false")
                values[field_name] = value
        return cls(**values)

    def merged(self, other: "ValidationConfiguration") -> "ValidationConfiguration":
        """Combine with `other`: flags are OR-ed, an explicit timeout wins."""
        values = {}
        for f in fields(self):
            if f.name == "probe_timeout":
                values[f.name] = other.probe_timeout if other.probe_timeout is not None else self.probe_timeout
            else:
                values[f.name] = getattr(self, f.name) or getattr(other, f.name)
        return replace(self, **values)
