from __future__ import annotations

import json
import os

import pytest
from click.testing import CliRunner

from compctl.cli import cli


@pytest.fixture
def fixture_project(monkeypatch):
    """Point the CLI at the bundled Nuxt-style project."""
    path = os.path.abspath(os.path.join(os.path.dirname(__file__), "../fixtures/nuxt-app"))
    monkeypatch.setenv("COMPCTL_CWD", path)
    return path


@pytest.mark.integration
def test_show_resolves_through_extended_tsconfig(fixture_project):
    runner = CliRunner()
    res = runner.invoke(cli, ["--json-output", "config", "show"])  # type: ignore[arg-type]
    assert res.exit_code == 0, res.output
    data = json.loads(res.output)
    paths = data["resolvedPaths"]
    assert paths["cwd"] == fixture_project
    assert paths["components"] == os.path.join(fixture_project, "components")
    assert paths["ui"] == os.path.join(fixture_project, "components", "ui")
    assert paths["composables"] == os.path.join(fixture_project, "composables")
    assert paths["lib"] == os.path.join(fixture_project, "lib")
    assert data["iconLibrary"] == "radix"


@pytest.mark.integration
def test_validate_fixture_project(fixture_project):
    runner = CliRunner()
    res = runner.invoke(cli, ["config", "validate"])  # type: ignore[arg-type]
    assert res.exit_code == 0, res.output
    assert "Configuration is valid" in res.output
