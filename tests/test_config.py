"""Tests for dtsgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from dtsgen.config import ConfigError, GeneratorConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, GeneratorConfig)
    assert config.root == tmp_path.resolve()
    assert config.source_dirs == []
    assert config.output_dir == tmp_path.resolve() / "typings"
    assert config.api_packages == []
    assert config.clean_output_first is False
    assert config.patches_dir is None
    assert config.exclude_paths == []
    assert config.header_title == "Java API"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".dtsgen.yml"
    config_file.write_text(
        """
source_dirs:
  - src/main/java
  - /opt/shared/java
output_dir: build/typings
api_packages: [com.example.api, com.example.extra]
clean_output_first: true
patches_dir: patches
exclude_paths:
  - "internal/"
header_title: Example API
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)
    root = tmp_path.resolve()

    assert config.source_dirs == [root / "src/main/java", Path("/opt/shared/java")]
    assert config.output_dir == root / "build/typings"
    assert config.api_packages == ["com.example.api", "com.example.extra"]
    assert config.clean_output_first is True
    assert config.patches_dir == root / "patches"
    assert config.exclude_paths == ["internal/"]
    assert config.header_title == "Example API"


def test_load_config_accepts_explicit_file_path(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yml"
    config_file.write_text("api_packages: com.example.api\n", encoding="utf-8")

    config = load_config(config_file)

    assert config.root == tmp_path.resolve()
    assert config.api_packages == ["com.example.api"]


def test_load_config_treats_empty_file_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".dtsgen.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.source_dirs == []
    assert config.header_title == "Java API"


def test_load_config_raises_for_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".dtsgen.yml").write_text("source_dirs: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_requires_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".dtsgen.yml").write_text("- src\n- lib\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_with_overrides_prefers_command_line_values(tmp_path: Path) -> None:
    config = GeneratorConfig(root=tmp_path, api_packages=["com.example.api"])

    updated = config.with_overrides(
        source_dirs=["other/java"],
        output_dir="out/types",
        clean_output_first=True,
        api_packages=[],
    )

    assert updated.source_dirs == [tmp_path / "other/java"]
    assert updated.output_dir == tmp_path / "out/types"
    assert updated.clean_output_first is True
    assert updated.api_packages == ["com.example.api"]
    assert config.clean_output_first is False
