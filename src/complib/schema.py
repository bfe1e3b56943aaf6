from __future__ import annotations

import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

DEFAULT_STYLE = "default"
DEFAULT_COMPONENTS = "@/components"
DEFAULT_UTILS = "@/lib/utils"
DEFAULT_TAILWIND_CSS = "app/globals.css"
DEFAULT_TAILWIND_CONFIG = "tailwind.config.js"
DEFAULT_TAILWIND_BASE_COLOR = "slate"
DEFAULT_TYPESCRIPT_CONFIG = "./tsconfig.json"

TAILWIND_CSS_PATH: Dict[str, str] = {
    "nuxt": "assets/css/tailwind.css",
    "vite": "src/assets/index.css",
    "laravel": "resources/css/app.css",
    "astro": "src/styles/globals.css",
}


class _Strict(BaseModel):
    # Unknown keys are rejected at every level; only camelCase wire names validate.
    model_config = ConfigDict(extra="forbid")


class TailwindConfig(_Strict):
    config: StrictStr
    css: StrictStr
    base_color: StrictStr = Field(alias="baseColor")
    css_variables: StrictBool = Field(default=True, alias="cssVariables")
    prefix: StrictStr = ""


class Aliases(_Strict):
    components: StrictStr
    utils: StrictStr
    composables: Optional[StrictStr] = None
    ui: Optional[StrictStr] = None
    lib: Optional[StrictStr] = None

    @field_validator("composables", "ui", "lib", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # May be omitted, never null.
        if value is None:
            raise ValueError("must be a string when present, not null")
        return value


class RawConfig(_Strict):
    """User-authored contents of components.json."""

    schema_url: Optional[StrictStr] = Field(default=None, alias="$schema")
    style: StrictStr
    typescript: StrictBool = True
    tailwind: TailwindConfig
    aliases: Aliases
    icon_library: Optional[StrictStr] = Field(default=None, alias="iconLibrary")

    @field_validator("schema_url", "icon_library", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must be a string when present, not null")
        return value

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, sort_keys=True)


class ResolvedPaths(_Strict):
    cwd: StrictStr
    tailwind_config: StrictStr = Field(alias="tailwindConfig")
    tailwind_css: StrictStr = Field(alias="tailwindCss")
    utils: StrictStr
    components: StrictStr
    composables: StrictStr
    lib: StrictStr
    ui: StrictStr


class Config(RawConfig):
    """RawConfig plus absolute paths for every alias."""

    resolved_paths: ResolvedPaths = Field(alias="resolvedPaths")
