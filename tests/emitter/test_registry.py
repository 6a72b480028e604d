"""Tests for the type index and hook registries."""

from __future__ import annotations

import logging
import textwrap

import pytest

from dtsgen.emitter import DeclarationEmitter, HookIndex, TypeIndex, derive_hook_name
from dtsgen.parser import parse_java_source


def _parse(source: str):
    return parse_java_source(textwrap.dedent(source))


TICK_EVENT = """
    package com.example.api.event;

    public interface TickEvent {
        interface Pre extends TickEvent {}
        interface Post extends TickEvent {}
    }
    """

RENDER_EVENT = """
    package com.example.api.client;

    public interface RenderEvent {
        interface Pre extends RenderEvent {}
    }
    """


@pytest.mark.parametrize(
    "type_name, expected",
    [
        ("Init", "init"),
        ("PlayerJoinEvent", "playerJoin"),
        ("Break", "onBreak"),
        ("BreakEvent", "onBreak"),
        ("Default", "onDefault"),
        ("Tick", "tick"),
        ("Event", ""),
    ],
)
def test_derive_hook_name(type_name: str, expected: str) -> None:
    assert derive_hook_name(type_name) == expected


def test_hook_index_collects_nested_types_of_event_interfaces() -> None:
    hooks = HookIndex()
    hooks.collect(_parse(TICK_EVENT))

    assert hooks.names() == ["pre", "post"]
    record = hooks.overloads("pre")[0]
    assert record.event_type == "TickEvent"
    assert record.sub_event == "Pre"
    assert record.full_type == "TickEvent.Pre"
    assert record.package_name == "com.example.api.event"


def test_hook_index_accumulates_overloads_for_shared_names() -> None:
    hooks = HookIndex()
    hooks.collect(_parse(TICK_EVENT))
    hooks.collect(_parse(RENDER_EVENT))

    assert len(hooks) == 3
    assert [record.event_type for record in hooks.overloads("pre")] == ["TickEvent", "RenderEvent"]
    assert [record.full_type for record in hooks.entries()] == [
        "TickEvent.Pre",
        "RenderEvent.Pre",
        "TickEvent.Post",
    ]


def test_hook_index_ignores_non_event_and_class_types() -> None:
    hooks = HookIndex()
    hooks.collect(
        _parse(
            """
            public interface Listener {
                interface Pre extends Listener {}
            }
            """
        )
    )
    hooks.collect(
        _parse(
            """
            public class ServerEvent {
                public interface Started {}
            }
            """
        )
    )

    assert len(hooks) == 0


def test_hook_index_skips_sub_types_without_a_hook_name(caplog: pytest.LogCaptureFixture) -> None:
    hooks = HookIndex()
    with caplog.at_level(logging.DEBUG, logger="dtsgen"):
        hooks.collect(
            _parse(
                """
                public interface FooEvent {
                    interface Event extends FooEvent {}
                    interface Pre extends FooEvent {}
                }
                """
            )
        )

    assert hooks.names() == ["pre"]
    assert [record.full_type for record in hooks.entries()] == ["FooEvent.Pre"]
    assert "Skipping FooEvent.Event: no hook name" in caplog.text


def test_emitter_hooks_file_omits_unnamed_hooks() -> None:
    emitter = DeclarationEmitter(["com.example.api"])
    emitter.emit(
        _parse(
            """
            package com.example.api.event;

            public interface FooEvent {
                interface Event extends FooEvent {}
            }
            """
        ),
        "com/example/api/event/FooEvent.d.ts",
    )

    hooks_file = emitter.render_hooks()

    assert "function (" not in hooks_file
    assert "FooEvent.Event" not in hooks_file


def test_type_record_module_path_drops_declaration_extension() -> None:
    index = TypeIndex()
    index.register(_parse(TICK_EVENT), "com/example/api/event/TickEvent.d.ts")

    record = index.top_level()[0]
    assert record.module_path == "com/example/api/event/TickEvent"


def test_type_index_lists_sorted_top_level_names() -> None:
    index = TypeIndex()
    index.register(_parse(TICK_EVENT), "com/example/api/event/TickEvent.d.ts")
    index.register(
        _parse(
            """
            package com.example.api;

            public interface Alpha {
            }
            """
        ),
        "com/example/api/Alpha.d.ts",
    )

    assert len(index) == 4
    assert [record.name for record in index] == ["TickEvent", "TickEvent.Pre", "TickEvent.Post", "Alpha"]
    assert [record.name for record in index.top_level()] == ["Alpha", "TickEvent"]
    nested = [record for record in index if record.is_nested]
    assert {record.parent_type for record in nested} == {"TickEvent"}


def test_type_index_keeps_first_path_for_duplicate_names(caplog: pytest.LogCaptureFixture) -> None:
    index = TypeIndex()
    source = """
        public interface Shared {
        }
        """
    index.register(_parse(source), "b/Shared.d.ts")
    index.register(_parse(source), "a/Shared.d.ts")

    with caplog.at_level(logging.WARNING, logger="dtsgen"):
        records = index.top_level()

    assert [record.file_path for record in records] == ["a/Shared.d.ts"]
    assert "Type Shared declared in both a/Shared.d.ts and b/Shared.d.ts" in caplog.text


def test_emitter_flushes_index_and_hooks_files() -> None:
    emitter = DeclarationEmitter(["com.example.api"])
    emitter.emit(_parse(TICK_EVENT), "com/example/api/event/TickEvent.d.ts")
    emitter.emit(_parse(RENDER_EVENT), "com/example/api/client/RenderEvent.d.ts")

    files = emitter.flush()

    assert set(files) == {"index.d.ts", "hooks.d.ts"}
    assert files["index.d.ts"] == (
        "/**\n"
        " * Centralized global declarations for Java API scripting.\n"
        " * Auto-generated - do not edit manually.\n"
        " */\n"
        "\n"
        "declare global {\n"
        "    // ============================================================================\n"
        "    // TYPE ALIASES - Make all interfaces available globally\n"
        "    // ============================================================================\n"
        "\n"
        "    type RenderEvent = import('./com/example/api/client/RenderEvent').RenderEvent;\n"
        "    type TickEvent = import('./com/example/api/event/TickEvent').TickEvent;\n"
        "}\n"
        "\n"
        "export {};\n"
    )
    assert files["hooks.d.ts"] == (
        "/**\n"
        " * Java API Event Hook Overloads\n"
        " * Auto-generated - do not edit manually.\n"
        " */\n"
        "\n"
        "import './minecraft-raw.d.ts';\n"
        "import './forge-events-raw.d.ts';\n"
        "\n"
        "declare global {\n"
        "    function pre(TickEvent: TickEvent.Pre): void;\n"
        "    function pre(RenderEvent: RenderEvent.Pre): void;\n"
        "    function post(TickEvent: TickEvent.Post): void;\n"
        "}\n"
        "\n"
        "export {};\n"
    )
