"""Tests for the generation pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dtsgen.config import GeneratorConfig
from dtsgen.orchestrator import Orchestrator
from tests._fixtures.java_builder import JavaTreeBuilder

PLAYER = """
    package com.example.api.entity;

    import com.example.api.world.World;

    /** A connected player. */
    public interface Player {
        String getName();
        World getWorld();
    }
    """

WORLD = """
    package com.example.api.world;

    public class World {
        public long time;
        public String name() { return "overworld"; }
    }
    """

JOIN_EVENT = """
    package com.example.api.event;

    public interface JoinEvent {
        interface First extends JoinEvent {}
    }
    """


def _project(java_tree: JavaTreeBuilder, **config: object) -> GeneratorConfig:
    java_tree.write(
        {
            "src/com/example/api/entity/Player.java": PLAYER,
            "src/com/example/api/world/World.java": WORLD,
            "src/com/example/api/event/JoinEvent.java": JOIN_EVENT,
            "src/com/example/api/internal/Helper.java": "class Helper {}\n",
        }
    )
    data = {"source_dirs": ["src"], "api_packages": ["com.example.api"]}
    data.update(config)
    java_tree.write_config(data)
    return java_tree.config()


def test_run_writes_declarations_index_and_hooks(java_tree: JavaTreeBuilder) -> None:
    config = _project(java_tree)

    result = Orchestrator().run(config)

    output = java_tree.path().resolve() / "typings"
    assert result.output_dir == output
    player = (output / "com/example/api/entity/Player.d.ts").read_text(encoding="utf-8")
    assert "getWorld(): import('../world/World').World;" in player
    assert "/** A connected player. */\nexport interface Player {" in player

    world = (output / "com/example/api/world/World.d.ts").read_text(encoding="utf-8")
    assert "export class World {\n    name(): string;\n    time: number;\n}" in world

    index = (output / "index.d.ts").read_text(encoding="utf-8")
    assert index.index("type JoinEvent") < index.index("type Player") < index.index("type World")

    hooks = (output / "hooks.d.ts").read_text(encoding="utf-8")
    assert "function first(JoinEvent: JoinEvent.First): void;" in hooks

    assert not (output / "com/example/api/internal/Helper.d.ts").exists()
    assert [path.name for path in result.skipped] == ["Helper.java"]
    assert len(result.files_written) == 5
    assert result.types == 4
    assert result.hooks == 1


def test_run_without_source_dirs_produces_nothing(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    config = GeneratorConfig(root=tmp_path)

    with caplog.at_level(logging.INFO, logger="dtsgen"):
        result = Orchestrator().run(config)

    assert result.empty
    assert not (tmp_path / "typings").exists()
    assert "No source directories configured" in caplog.text


def test_run_with_only_missing_source_dirs_logs_error(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    config = GeneratorConfig(root=tmp_path, source_dirs=[tmp_path / "nope"])

    with caplog.at_level(logging.INFO, logger="dtsgen"):
        result = Orchestrator().run(config)

    assert result.empty
    assert "Source directory not found" in caplog.text
    assert "No valid source directories found" in caplog.text
    error_levels = [record.levelno for record in caplog.records if "No valid" in record.getMessage()]
    assert error_levels == [logging.ERROR]


def test_run_cleans_stale_output_but_keeps_raw_files(java_tree: JavaTreeBuilder) -> None:
    config = _project(java_tree, clean_output_first=True)
    output = java_tree.path().resolve() / "typings"
    output.mkdir()
    (output / "Stale.d.ts").write_text("stale", encoding="utf-8")
    (output / "minecraft-raw.d.ts").write_text("raw", encoding="utf-8")

    Orchestrator().run(config)

    assert not (output / "Stale.d.ts").exists()
    assert (output / "minecraft-raw.d.ts").read_text(encoding="utf-8") == "raw"


def test_run_copies_patch_directory(java_tree: JavaTreeBuilder) -> None:
    java_tree.write({"patches/extra.d.ts": "declare const extra: number;\n"})
    config = _project(java_tree, patches_dir="patches")

    Orchestrator().run(config)

    copied = java_tree.path() / "typings" / "patches" / "extra.d.ts"
    assert copied.read_text(encoding="utf-8") == "declare const extra: number;\n"


def test_run_skips_unreadable_sources(
    java_tree: JavaTreeBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    config = _project(java_tree)
    broken = java_tree.path().resolve() / "src/com/example/api/Broken.java"
    broken.write_bytes(b"\xff\xfe\xfa public interface Broken {}")

    with caplog.at_level(logging.WARNING, logger="dtsgen"):
        result = Orchestrator().run(config)

    assert broken in result.skipped
    assert "Unable to read" in caplog.text
    assert (java_tree.path() / "typings/index.d.ts").exists()


def test_generate_loads_config_from_path(java_tree: JavaTreeBuilder) -> None:
    _project(java_tree)

    result = Orchestrator().generate(str(java_tree.path()), output_dir="out")

    assert result.output_dir == java_tree.path().resolve() / "out"
    assert (result.output_dir / "index.d.ts").exists()


def test_generate_rejects_missing_path(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Orchestrator().generate(str(tmp_path / "missing"))


def test_convert_source_renders_in_memory() -> None:
    outcome = Orchestrator().convert_source(
        "package com.example.api.event;\n"
        "public interface JoinEvent {\n"
        "    interface First extends JoinEvent {}\n"
        "}\n",
        "com/example/api/event/JoinEvent.d.ts",
        ["com.example.api"],
        header_title="Example API",
    )

    assert "Generated from Java file for Example API" in outcome.declaration
    assert "export type First = JoinEvent;" in outcome.declaration
    assert outcome.types == 2
    assert outcome.hooks == 1


def test_convert_source_without_public_types_is_empty() -> None:
    outcome = Orchestrator().convert_source("class Hidden {}", "Hidden.d.ts")

    assert outcome.declaration == ""
    assert outcome.types == 0
