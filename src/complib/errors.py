"""Error types and message helpers for complib."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class ConfigError(RuntimeError):
    pass


class InvalidConfiguration(ConfigError):
    """The components configuration exists but does not match the schema."""

    def __init__(self, message: str, cwd: Optional[Union[str, Path]] = None) -> None:
        super().__init__(message)
        self.cwd = str(cwd) if cwd is not None else None


class MissingPathMapping(ConfigError):
    """No tsconfig.json / jsconfig.json could be located for alias resolution."""

    def __init__(
        self,
        message: str,
        config_name: Optional[str] = None,
        cwd: Optional[Union[str, Path]] = None,
    ) -> None:
        super().__init__(message)
        self.config_name = config_name
        self.cwd = str(cwd) if cwd is not None else None


def format_config_error(error: Exception) -> str:
    """Format configuration-related error messages."""
    error_str = str(error)

    if isinstance(error, MissingPathMapping):
        name = error.config_name or "tsconfig.json"
        return (
            f"{error_str}.\n"
            f"Aliases in components.json are resolved through {name}. Please either:\n"
            f"  • Create {name} with compilerOptions.paths (e.g. \"@/*\": [\"./*\"]), or\n"
            f"  • Set \"typescript\" in components.json to match the file you have"
        )

    if isinstance(error, InvalidConfiguration):
        cause = error.__cause__
        detail = f"\n\n{cause}" if cause is not None else ""
        return f"{error_str}{detail}"

    return f"Configuration error: {error_str}"


def suggest_troubleshooting_steps(error: Exception) -> list[str]:
    """Suggest troubleshooting steps based on the error."""
    suggestions = []

    if isinstance(error, MissingPathMapping):
        suggestions.extend([
            "Run the command from the project root (where package.json lives)",
            "Check that tsconfig.json/jsconfig.json is valid JSON (comments are allowed)",
            "Verify any \"extends\" target exists",
        ])

    elif isinstance(error, InvalidConfiguration):
        error_str = str(error.__cause__ or error).lower()
        if "extra" in error_str or "not permitted" in error_str:
            suggestions.append("Remove fields that are not part of the components.json schema")
        if "missing" in error_str:
            suggestions.append("Add the required fields: style, tailwind.{config,css,baseColor}, aliases.{components,utils}")
        suggestions.extend([
            "Compare your file with the \"$schema\" referenced in components.json",
            "Booleans must be true/false, not strings",
        ])

    if not suggestions:
        suggestions.extend([
            "Check the logs with -v/--verbose flag for more details",
            "Verify your components.json file is correct",
        ])

    return suggestions
