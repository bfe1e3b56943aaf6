from __future__ import annotations

import pytest

from complib.errors import InvalidConfiguration
from complib.loader import find_config_file, load_named_config


def test_loads_json(tmp_path):
    (tmp_path / "components.json").write_text('{"style": "default"}')
    assert load_named_config("components", tmp_path) == {"style": "default"}


def test_loads_yaml(tmp_path):
    (tmp_path / "components.yaml").write_text(
        """
style: new-york
aliases:
  components: "@/components"
        """.strip()
    )
    assert load_named_config("components", tmp_path) == {
        "style": "new-york",
        "aliases": {"components": "@/components"},
    }


def test_loads_rc_file(tmp_path):
    (tmp_path / ".componentsrc").write_text('{"style": "default"}')
    assert load_named_config("components", tmp_path) == {"style": "default"}


def test_json_takes_precedence(tmp_path):
    (tmp_path / "components.yml").write_text("style: yaml")
    (tmp_path / "components.json").write_text('{"style": "json"}')
    assert find_config_file("components", tmp_path) == tmp_path / "components.json"
    assert load_named_config("components", tmp_path) == {"style": "json"}


def test_missing_file_returns_none(tmp_path):
    assert find_config_file("components", tmp_path) is None
    assert load_named_config("components", tmp_path) is None


@pytest.mark.parametrize("name,content", [("components.json", ""), ("components.yaml", "")])
def test_empty_file_returns_none(tmp_path, name, content):
    (tmp_path / name).write_text(content)
    assert load_named_config("components", tmp_path) is None


def test_non_mapping_rejected(tmp_path):
    (tmp_path / "components.json").write_text("[1, 2, 3]")
    with pytest.raises(InvalidConfiguration) as exc:
        load_named_config("components", tmp_path)
    assert "list" in str(exc.value)


def test_bad_yaml_rejected(tmp_path):
    (tmp_path / "components.yaml").write_text("style: [unclosed")
    with pytest.raises(InvalidConfiguration):
        load_named_config("components", tmp_path)
