from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import ValidationError

from .errors import InvalidConfiguration, MissingPathMapping
from .loader import load_named_config
from .schema import Config, RawConfig
from .tsconfig import TsConfig, get_tsconfig, resolve_import

CONFIG_NAME = "components"


def _abs(*parts: Union[str, Path]) -> str:
    return os.path.normpath(os.path.abspath(os.path.join(*parts)))


def get_raw_config(cwd: Union[str, Path]) -> Optional[RawConfig]:
    """Load and validate components.json from ``cwd``.

    Returns None when no configuration (or an empty one) is present.
    """
    try:
        data = load_named_config(CONFIG_NAME, cwd)
        if not data:
            return None
        return RawConfig.model_validate(data)
    except (InvalidConfiguration, ValidationError) as e:
        raise InvalidConfiguration(
            f"Invalid configuration found in {cwd}/{CONFIG_NAME}.json.", cwd=cwd
        ) from e


def get_config(cwd: Union[str, Path]) -> Optional[Config]:
    config = get_raw_config(cwd)
    if config is None:
        return None

    if not config.icon_library:
        config.icon_library = "radix" if config.style == "new-york" else "lucide"

    return resolve_config_paths(cwd, config)


def get_ts_config(cwd: Union[str, Path], tsconfig_name: str) -> TsConfig:
    parsed = get_tsconfig(Path(cwd) / "package.json", tsconfig_name)
    if parsed is None:
        raise MissingPathMapping(f"Failed to find {tsconfig_name}", config_name=tsconfig_name, cwd=cwd)
    return parsed


def derive_fallback_paths(
    cwd: Union[str, Path], components: Optional[str], utils: Optional[str]
) -> Dict[str, str]:
    """Default ui/lib/composables locations from the resolved base aliases.

    ui sits inside components, lib is the parent of utils, and composables is
    a sibling of components. A base that did not resolve falls back to cwd.
    """
    components_dir = components or str(cwd)
    utils_dir = utils or str(cwd)
    return {
        "ui": _abs(components_dir, "ui"),
        "lib": _abs(utils_dir, ".."),
        "composables": _abs(components_dir, "..", "composables"),
    }


def resolve_config_paths(cwd: Union[str, Path], config: RawConfig) -> Config:
    tsconfig_type = "tsconfig.json" if config.typescript else "jsconfig.json"
    ts_config = get_ts_config(cwd, tsconfig_type)

    aliases = config.aliases
    utils = resolve_import(aliases.utils, ts_config)
    components = resolve_import(aliases.components, ts_config)
    fallback = derive_fallback_paths(cwd, components, utils)

    resolved_paths = {
        "cwd": _abs(cwd),
        "tailwindConfig": _abs(cwd, config.tailwind.config),
        "tailwindCss": _abs(cwd, config.tailwind.css),
        "utils": utils,
        "components": components,
        "ui": resolve_import(aliases.ui, ts_config) if aliases.ui else fallback["ui"],
        "lib": resolve_import(aliases.lib, ts_config) if aliases.lib else fallback["lib"],
        "composables": (
            resolve_import(aliases.composables, ts_config)
            if aliases.composables
            else fallback["composables"]
        ),
    }

    # Shape mismatches here are internal defects; ValidationError propagates.
    return Config.model_validate(
        {**config.model_dump(by_alias=True, exclude_none=True), "resolvedPaths": resolved_paths}
    )
