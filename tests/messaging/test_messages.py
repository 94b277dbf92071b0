"""Tests for sparkle/messaging/commands.py and events.py"""

from dataclasses import FrozenInstanceError

import pytest

from sparkle.messaging.commands import COMMAND_TYPES, EndTurn, ToggleDie
from sparkle.messaging.events import EVENT_TYPES, DelayedAction, GameEvent


class TestCommands:

    def test_fourteen_commands(self):
        assert len(COMMAND_TYPES) == 14
        assert len(set(COMMAND_TYPES)) == 14

    def test_commands_are_immutable(self):
        command = ToggleDie(3)
        with pytest.raises(FrozenInstanceError):
            command.die_id = 4

    def test_end_turn_defaults_to_voluntary(self):
        assert EndTurn().busted is False
        assert EndTurn() != EndTurn(busted=True)


class TestEvents:

    def test_every_event_tagged_once(self):
        tags = [payload.event for payload in EVENT_TYPES]
        assert len(tags) == len(set(tags))
        assert set(tags) == set(GameEvent)

    def test_event_names(self):
        assert GameEvent.DICE_ROLLED.name == "DICE_ROLLED"
        assert len(GameEvent) == 14

    def test_delayed_action_carries_command(self):
        action = DelayedAction(EndTurn(busted=True), 1000)
        assert action.event == GameEvent.DELAYED_ACTION
        assert action.command.busted
