"""Core library for the components CLI.

Loads components.json and resolves its import aliases to filesystem paths.
"""

__all__ = [
    "config",
    "errors",
    "loader",
    "schema",
    "tsconfig",
]
