"""Central configuration and constants for ``covmerge``."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from functools import cache
from importlib import resources
from pathlib import Path

from covmerge._meta import logger

# Percentage reported when a category has nothing to measure.
FULL_COVERAGE = 100.0

# Decimal places kept (floored) in every reported percentage.
PERCENT_PRECISION = 2

# Default logging format for hosts that configure logging themselves.
LOG_FORMAT = "%(levelname)s: %(message)s"


_SCHEMA_FILES: dict[str, str] = {
    "v1": "file_coverage.schema.json",
}


@cache
def get_schema(version: str = "v1") -> dict[str, object]:
    """Load and cache the JSON schema for serialized file coverage records."""
    try:
        filename = _SCHEMA_FILES[version]
    except KeyError as exc:
        choices = ", ".join(sorted(_SCHEMA_FILES))
        msg = f"Unsupported schema version: {version!r}. Available versions: {choices}"
        raise ValueError(msg) from exc
    return json.loads(resources.files("covmerge.data").joinpath(filename).read_text(encoding="utf-8"))


@dataclass(frozen=True, slots=True)
class CovmergeConfig:
    """Project-level settings read from ``[tool.covmerge]``.

    Parameters
    ----------
    report_logic:
        Track branch truthiness (``bT``) on records created by the aggregator.
    validate_input:
        Validate serialized records against the bundled schema when loading.
    """

    report_logic: bool = False
    validate_input: bool = True


def _read_pyproject_table(pyproject: Path) -> dict[str, object] | None:
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to parse %s: %s", pyproject, e)
        return None

    table = data.get("tool", {}).get("covmerge")
    return table if isinstance(table, dict) else None


def load_config(path: Path | None = None) -> CovmergeConfig:
    """Return the configuration found in *path* (default ``./pyproject.toml``).

    Missing files, unreadable files and missing tables all yield the defaults.
    Unknown keys are ignored; known keys must be booleans.
    """
    pyproject = (path or Path("./pyproject.toml")).resolve()
    if not pyproject.exists():
        return CovmergeConfig()

    table = _read_pyproject_table(pyproject)
    if table is None:
        return CovmergeConfig()

    values: dict[str, bool] = {}
    for key in ("report_logic", "validate_input"):
        if key not in table:
            continue
        value = table[key]
        if not isinstance(value, bool):
            msg = f"[tool.covmerge] {key} must be a boolean, got {value!r}"
            raise ValueError(msg)
        values[key] = value

    logger.debug("Using covmerge configuration from %s: %s", pyproject, values)
    return CovmergeConfig(**values)


__all__ = [
    "FULL_COVERAGE",
    "LOG_FORMAT",
    "PERCENT_PRECISION",
    "CovmergeConfig",
    "get_schema",
    "load_config",
]
