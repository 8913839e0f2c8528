from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import UnopenedFileException

_BOOL_TAG = "tag:yaml.org,2002:bool"


class _SpeciesLoader(yaml.SafeLoader):
    pass


# own resolver table without bools, so keys like NO or ON stay strings
_SpeciesLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_yaml_file(filename: str | Path) -> Any:
    """
    Read and parse a YAML file with plain scalars never read as booleans,
    mapping I/O and syntax errors to UnopenedFileException.
    """
    path = Path(filename)
    if not path.exists():
        raise UnopenedFileException(f"Could not load database file {filename}")
    try:
        return yaml.load(path.read_text().replace("\t", " "), Loader=_SpeciesLoader)
    except yaml.YAMLError as exc:
        raise UnopenedFileException(f"Failed to parse {filename}: {exc}") from exc


def parse_flag(value: Any) -> bool:
    """Interpret a scalar read without bool resolution as a flag."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("yes", "true", "on", "1"):
        return True
    if text in ("no", "false", "off", "0"):
        return False
    raise ValueError(f"Cannot interpret {value!r} as a flag")
