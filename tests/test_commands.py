from __future__ import annotations

import dataclasses

import pytest

from freestore.commands import COMMAND_TYPES, Delete, Get, Put, is_command
from freestore.dsl import delete, get, put
from freestore.program import Suspend


class TestCommandTypes:
    def test_put_fields(self):
        command = Put("toto", 3)
        assert command.key == "toto"
        assert command.value == 3

    def test_get_defaults_to_no_expected_type(self):
        assert Get("toto").expected_type is None
        assert Get("toto", int).expected_type is int

    def test_commands_are_frozen(self):
        command = Delete("toto")
        with pytest.raises(dataclasses.FrozenInstanceError):
            command.key = "other"  # type: ignore[misc]

    def test_equality_ignores_creation_context(self):
        assert put("k", 1).command == Put("k", 1)
        assert get("k").command == Get("k")
        assert delete("k").command == Delete("k")

    def test_str_renders_call_form(self):
        assert str(Put("wild-cats", 2)) == "put(wild-cats, 2)"
        assert str(Get("wild-cats")) == "get(wild-cats)"
        assert str(Delete("tame-cats")) == "delete(tame-cats)"

    def test_is_command(self):
        assert is_command(Put("k", 1))
        assert is_command(Get("k"))
        assert is_command(Delete("k"))
        assert not is_command("put")
        assert set(COMMAND_TYPES) == {Put, Get, Delete}


class TestSmartConstructors:
    def test_constructors_lift_commands(self):
        for program in (put("k", 1), get("k"), delete("k")):
            assert isinstance(program, Suspend)
            assert is_command(program.command)

    def test_creation_context_points_at_caller(self):
        program = put("k", 1)
        created_at = program.command.created_at
        assert created_at is not None
        assert created_at.filename == __file__
        assert created_at.function == "test_creation_context_points_at_caller"
        assert "put(" in (created_at.code or "")
        assert __file__ in created_at.format_location()

    def test_key_must_be_string(self):
        with pytest.raises(TypeError, match="key must be a str"):
            put(1, "x")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            get(None)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            delete(b"k")  # type: ignore[arg-type]


def test_debug_mode_records_enclosing_frames(monkeypatch):
    import freestore.utils

    monkeypatch.setattr(freestore.utils, "DEBUG_COMMANDS", False)
    assert put("k", 1).command.created_at.stack_trace == ()

    monkeypatch.setattr(freestore.utils, "DEBUG_COMMANDS", True)
    created_at = put("k", 1).command.created_at
    assert created_at.stack_trace
    assert "Creation stack trace:" in created_at.format_full()
