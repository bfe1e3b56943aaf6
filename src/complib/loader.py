from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import InvalidConfiguration


def _candidates(name: str, cwd: Path) -> List[Path]:
    return [
        cwd / f"{name}.json",
        cwd / f"{name}.yaml",
        cwd / f"{name}.yml",
        cwd / f".{name}rc",
    ]


def find_config_file(name: str, cwd: Union[str, Path]) -> Optional[Path]:
    """Return the first ``name`` config file present in ``cwd``, if any."""
    for c in _candidates(name, Path(cwd)):
        if c.is_file():
            return c
    return None


def load_named_config(name: str, cwd: Union[str, Path]) -> Optional[Dict[str, Any]]:
    """Load the ``name`` config file from ``cwd``.

    Returns None when no file exists or the file holds no document. JSON files
    are parsed strictly; YAML and rc files go through ``yaml.safe_load``.
    """
    cfg_path = find_config_file(name, cwd)
    if cfg_path is None:
        return None

    try:
        text = cfg_path.read_text(encoding="utf-8")
        if cfg_path.suffix == ".json":
            data = json.loads(text) if text.strip() else None
        else:
            data = yaml.safe_load(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidConfiguration(f"Failed to parse {cfg_path}: {e}", cwd=cwd) from e

    if data is None:
        return None
    if not isinstance(data, dict):
        raise InvalidConfiguration(
            f"Config must be an object, got {type(data).__name__}: {cfg_path}", cwd=cwd
        )
    return data
