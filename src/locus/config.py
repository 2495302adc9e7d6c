"""Configuration management for locus."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILE_NAME = ".locus"


@dataclass
class LocusConfig:
    """Settings read from the .locus file.

    Attributes:
        encoding: Text encoding used to read source documents.
        cross_representation: Emit cross-representation signatures instead of
            canonical ones by default.
        indent: Indentation of JSON output.
    """
    encoding: str = "utf-8"
    cross_representation: bool = False
    indent: int = 2


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    return section if isinstance(section, dict) else {}


def _flag(section: dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    return value if isinstance(value, bool) else default


def load_config(root: Path | None = None) -> LocusConfig:
    """Load configuration from the .locus file in root.

    Args:
        root: Directory containing the .locus file. If None, uses current directory.

    Returns:
        LocusConfig object with loaded or default values.

    Notes:
        If .locus doesn't exist or can't be parsed, returns default config.
        Expected YAML structure:

        ```yaml
        document:
          encoding: utf-8
        signatures:
          cross_representation: false
        output:
          indent: 2
        ```
    """
    if root is None:
        root = Path.cwd()

    config_path = root / CONFIG_FILE_NAME

    if not config_path.exists():
        return LocusConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            return LocusConfig()

        document = _section(data, "document")
        signatures = _section(data, "signatures")
        output = _section(data, "output")

        return LocusConfig(
            encoding=str(document.get("encoding", LocusConfig.encoding)),
            cross_representation=_flag(signatures, "cross_representation", LocusConfig.cross_representation),
            indent=int(output.get("indent", LocusConfig.indent)),
        )
    except (yaml.YAMLError, OSError, KeyError, TypeError, ValueError):
        # Return default config on any parsing errors
        return LocusConfig()
