"""
Tests for the input side: key bindings, KeyboardInput and ScriptedPlayer.
"""

import pytest

from bombsnake.domain import GameState, UP, DOWN, LEFT, RIGHT
from bombsnake.players import KeyboardInput, ScriptedPlayer, direction_for_key
from bombsnake.players.base import Player


class TestKeyBindings:
    """Tests for direction_for_key()."""

    @pytest.mark.parametrize("key,expected", [
        ("ArrowUp", UP),
        ("ArrowDown", DOWN),
        ("ArrowLeft", LEFT),
        ("ArrowRight", RIGHT),
        ("w", UP),
        ("a", LEFT),
        ("s", DOWN),
        ("d", RIGHT),
        ("W", UP),
        ("k", UP),
        ("j", DOWN),
        ("h", LEFT),
        ("l", RIGHT),
    ])
    def test_bound_keys(self, key, expected):
        assert direction_for_key(key) == expected

    @pytest.mark.parametrize("key", list("wasdhjkl"))
    def test_letter_case_does_not_change_direction(self, key):
        """Shift or CapsLock must not turn D into a different direction."""
        assert direction_for_key(key.upper()) == direction_for_key(key)

    @pytest.mark.parametrize("key", ["Enter", " ", "q", "U", "R", "", None, "ArrowUpp"])
    def test_unbound_keys(self, key):
        assert direction_for_key(key) is None


class TestKeyboardInput:
    """Tests for the keyboard adapter."""

    def test_bound_key_queues_direction(self):
        state = GameState(seed=1)
        keyboard = KeyboardInput(state)

        assert keyboard.handle_key("ArrowUp") is True
        assert state.pending_direction == UP

    def test_unbound_key_is_dropped(self):
        state = GameState(seed=1)
        keyboard = KeyboardInput(state)

        assert keyboard.handle_key("Escape") is False
        assert keyboard.dropped == 1
        assert state.pending_direction == RIGHT

    def test_reversal_key_is_rejected(self):
        state = GameState(seed=1)
        keyboard = KeyboardInput(state)

        assert keyboard.handle_key("ArrowLeft") is False
        assert keyboard.dropped == 0
        assert state.pending_direction == RIGHT


class TestScriptedPlayer:
    """Tests for the scripted player."""

    def test_string_script(self):
        player = ScriptedPlayer("U.R")
        snapshot = GameState(seed=1).snapshot()

        keys = [player.get_key(snapshot) for _ in range(5)]

        assert keys == ["ArrowUp", None, "ArrowRight", None, None]
        assert player.exhausted is True

    def test_whitespace_is_skipped(self):
        player = ScriptedPlayer("U R\nD")
        assert player.keys == ["ArrowUp", "ArrowRight", "ArrowDown"]

    def test_script_letters_ignore_case(self):
        player = ScriptedPlayer("rrl.Ud")
        assert player.keys == [
            "ArrowRight", "ArrowRight", "ArrowLeft", None, "ArrowUp", "ArrowDown",
        ]

    def test_lowercase_script_drives_the_snake(self):
        """A lowercase "d" in a script turns down, not right."""
        state = GameState(seed=1)
        keyboard = KeyboardInput(state)
        player = ScriptedPlayer("d")

        assert keyboard.handle_key(player.get_key(state.snapshot())) is True
        assert state.pending_direction == DOWN

    def test_list_script(self):
        player = ScriptedPlayer(["ArrowUp", None, ".", "ArrowLeft"])
        assert player.keys == ["ArrowUp", None, None, "ArrowLeft"]

    def test_base_player_is_abstract(self):
        with pytest.raises(NotImplementedError):
            Player().get_key(GameState(seed=1).snapshot())
