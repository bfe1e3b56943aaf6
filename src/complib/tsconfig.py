"""tsconfig.json / jsconfig.json lookup and import-alias matching.

Only the parts of a TypeScript project config that matter for alias
resolution are modelled: ``extends``, ``compilerOptions.baseUrl`` and
``compilerOptions.paths``. Files are read as JSONC (comments and trailing
commas allowed).
"""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple, Union

from .errors import MissingPathMapping

_RELATIVE = re.compile(r"^\.{1,2}(/.*)?$")


def _abs(p: Union[str, Path]) -> Path:
    return Path(os.path.normpath(os.path.abspath(p)))


@dataclass(frozen=True)
class TsConfig:
    path: Path
    compiler_options: Dict[str, Any] = field(default_factory=dict)
    base_url: Optional[Path] = None
    paths: Optional[Dict[str, List[str]]] = None
    # Directory `paths` substitutions are relative to when no baseUrl is set.
    paths_base: Optional[Path] = None


def _scan(text: str, drop: Callable[[str, int], int]) -> str:
    """Copy ``text``, letting ``drop`` skip spans that start outside strings.

    ``drop(text, i)`` returns the index to resume from, or ``i`` to keep the
    character at ``i``.
    """
    out: List[str] = []
    i, n = 0, len(text)
    in_str = False
    while i < n:
        ch = text[i]
        if in_str:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_str = False
            i += 1
            continue
        if ch == '"':
            in_str = True
            out.append(ch)
            i += 1
            continue
        j = drop(text, i)
        if j != i:
            i = j
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _drop_comment(text: str, i: int) -> int:
    if text.startswith("//", i):
        j = text.find("\n", i)
        return len(text) if j == -1 else j
    if text.startswith("/*", i):
        j = text.find("*/", i + 2)
        return len(text) if j == -1 else j + 2
    return i


def _drop_trailing_comma(text: str, i: int) -> int:
    if text[i] != ",":
        return i
    j = i + 1
    while j < len(text) and text[j].isspace():
        j += 1
    if j < len(text) and text[j] in "}]":
        return i + 1
    return i


def strip_jsonc(text: str) -> str:
    """Turn JSONC into plain JSON. String contents are left untouched."""
    text = _scan(text, _drop_comment)
    return _scan(text, _drop_trailing_comma)


def _read_jsonc(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(strip_jsonc(path.read_text(encoding="utf-8-sig")) or "{}")
    except (OSError, UnicodeDecodeError, ValueError) as e:
        raise MissingPathMapping(
            f"Failed to parse {path}: {e}", config_name=path.name, cwd=path.parent
        ) from e
    if not isinstance(data, dict):
        raise MissingPathMapping(
            f"Failed to parse {path}: expected an object", config_name=path.name, cwd=path.parent
        )
    return data


def _extends_candidates(target: Path) -> List[Path]:
    return [target, Path(f"{target}.json"), target / "tsconfig.json"]


def _resolve_extends(spec: str, owner: Path) -> Path:
    if spec.startswith(".") or os.path.isabs(spec):
        roots = [owner.parent / spec]
    else:
        # Bare specifier: search node_modules from the owning file upwards.
        roots = [d / "node_modules" / spec for d in [owner.parent, *owner.parent.parents]]

    for root in roots:
        for candidate in _extends_candidates(root):
            if candidate.is_file():
                return _abs(candidate)

    raise MissingPathMapping(
        f"Failed to resolve extends {spec!r} in {owner}", config_name=owner.name, cwd=owner.parent
    )


def _parse(path: Path, seen: FrozenSet[Path]) -> TsConfig:
    if path in seen:
        raise MissingPathMapping(
            f"Circular extends detected at {path}", config_name=path.name, cwd=path.parent
        )
    seen = seen | {path}
    raw = _read_jsonc(path)

    extends = raw.get("extends")
    if isinstance(extends, str):
        parents = [extends]
    elif isinstance(extends, list):
        parents = [e for e in extends if isinstance(e, str)]
    else:
        parents = []

    options: Dict[str, Any] = {}
    base_url: Optional[Path] = None
    paths: Optional[Dict[str, List[str]]] = None
    paths_base: Optional[Path] = None

    # Later entries in extends win over earlier ones; the file itself wins last.
    for spec in parents:
        parent = _parse(_resolve_extends(spec, path), seen)
        options.update(parent.compiler_options)
        if parent.base_url is not None:
            base_url = parent.base_url
        if parent.paths is not None:
            paths, paths_base = parent.paths, parent.paths_base

    own = raw.get("compilerOptions")
    if isinstance(own, dict):
        options.update(own)
        if isinstance(own.get("baseUrl"), str):
            base_url = _abs(path.parent / own["baseUrl"])
        if isinstance(own.get("paths"), dict):
            paths, paths_base = own["paths"], path.parent

    return TsConfig(
        path=path,
        compiler_options=options,
        base_url=base_url,
        paths=paths,
        paths_base=paths_base,
    )


def parse_tsconfig(path: Union[str, Path]) -> TsConfig:
    """Parse a tsconfig/jsconfig file, following ``extends``."""
    return _parse(_abs(path), frozenset())


def get_tsconfig(
    search_path: Union[str, Path], config_name: str = "tsconfig.json"
) -> Optional[TsConfig]:
    """Find ``config_name`` at ``search_path`` or in any ancestor directory.

    Returns None when the filesystem root is reached without a match.
    """
    directory = _abs(search_path)
    while True:
        candidate = directory / config_name
        if candidate.is_file():
            return parse_tsconfig(candidate)
        parent = directory.parent
        if parent == directory:
            return None
        directory = parent


@dataclass(frozen=True)
class _PathEntry:
    pattern: str
    prefix: str
    suffix: str
    wildcard: bool
    substitutions: Tuple[str, ...]

    def matches(self, specifier: str) -> bool:
        return (
            len(specifier) >= len(self.prefix) + len(self.suffix)
            and specifier.startswith(self.prefix)
            and specifier.endswith(self.suffix)
        )


def _parse_paths(paths: Dict[str, Any]) -> List[_PathEntry]:
    entries: List[_PathEntry] = []
    for pattern, subs in paths.items():
        if not isinstance(subs, list):
            continue
        star = pattern.find("*")
        wildcard = star != -1
        prefix, suffix = (pattern[:star], pattern[star + 1:]) if wildcard else (pattern, "")
        entries.append(
            _PathEntry(
                pattern=pattern,
                prefix=prefix,
                suffix=suffix,
                wildcard=wildcard,
                substitutions=tuple(s for s in subs if isinstance(s, str)),
            )
        )
    return entries


def create_paths_matcher(tsconfig: TsConfig) -> Optional[Callable[[str], List[str]]]:
    """Build a specifier -> candidate absolute paths function.

    Returns None when the config declares neither ``baseUrl`` nor ``paths``.
    """
    if tsconfig.base_url is None and not tsconfig.paths:
        return None

    root = tsconfig.base_url or tsconfig.paths_base or tsconfig.path.parent
    entries = _parse_paths(tsconfig.paths or {})

    def _substitute(entry: _PathEntry, captured: str) -> List[str]:
        return [str(_abs(root / s.replace("*", captured, 1))) for s in entry.substitutions]

    def matcher(specifier: str) -> List[str]:
        if _RELATIVE.match(specifier):
            return []

        for entry in entries:
            if not entry.wildcard and entry.pattern == specifier:
                return _substitute(entry, "")

        best: Optional[_PathEntry] = None
        for entry in entries:
            if entry.wildcard and entry.matches(specifier):
                if best is None or len(entry.prefix) > len(best.prefix):
                    best = entry

        if best is None:
            if tsconfig.base_url is not None:
                return [str(_abs(tsconfig.base_url / specifier))]
            return []

        captured = specifier[len(best.prefix):len(specifier) - len(best.suffix)]
        return _substitute(best, captured)

    return matcher


def resolve_import(import_path: str, tsconfig: TsConfig) -> Optional[str]:
    """Resolve an import alias to its first mapped absolute path, or None."""
    matcher = create_paths_matcher(tsconfig)
    if matcher is None:
        return None
    paths = matcher(import_path)
    return paths[0] if paths else None
