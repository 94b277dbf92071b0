"""Tests for sparkle/realtime/session.py"""

import threading
import time
from unittest.mock import MagicMock

from sparkle.messaging.commands import Bank, DiscardUnscored, ResetGame, Roll, ToggleDie
from sparkle.messaging.events import DiceDiscarded, DiceRolled, GameReset
from sparkle.messaging.handlers import CommandResult


class TestGameSession:

    def test_starts_with_new_game(self, session, config):
        assert session.state.turn_number == 1
        assert len(session.state.dice) == config.starting_dice

    def test_submit_stores_new_state(self, session, dice):
        dice.queue(1, 2, 3, 4, 6, 6)
        result = session.submit(Roll())
        assert session.state is result.state
        assert session.state.rolls_in_turn == 1

    def test_commands_build_on_each_other(self, session, dice):
        dice.queue(1, 2, 3, 4, 6, 6)
        session.submit(Roll())
        session.submit(ToggleDie(session.state.dice[0].id))
        session.submit(Bank())
        assert session.state.banked_score == 100

    def test_events_published(self, session, dice):
        subscriber = MagicMock()
        session.subscribe(subscriber)
        dice.queue(1, 2, 3, 4, 6, 6)

        session.submit(Roll())

        (event,), _ = subscriber.call_args
        assert isinstance(event, DiceRolled)

    def test_subscriber_sees_stored_state(self, session):
        seen = []
        session.subscribe(lambda event: seen.append(session.state))
        result = session.submit(ResetGame())
        assert seen == [result.state]

    def test_state_listener_runs_before_events(self, session):
        order = []
        session.on_state_change(lambda state: order.append("state"))
        session.subscribe(lambda event: order.append(event.event.name))

        session.submit(ResetGame())

        assert order == ["state", "GAME_RESET"]

    def test_failing_listener_is_logged(self, session, caplog):
        session.on_state_change(MagicMock(side_effect=RuntimeError("listener down")))
        heard = MagicMock()
        session.subscribe(heard)

        session.submit(ResetGame())

        heard.assert_called_once_with(GameReset())
        assert "listener down" in caplog.text

    def test_listener_unsubscribe(self, session):
        listener = MagicMock()
        unsubscribe = session.on_state_change(listener)
        unsubscribe()
        session.submit(ResetGame())
        listener.assert_not_called()

    def test_replace_state(self, session, rolled_state):
        loaded = rolled_state(1, 5, total_score=700, turn_number=3, threshold=400)
        session.replace_state(loaded)
        assert session.state is loaded

    def test_concurrent_submits_serialize(self, session):
        listener_calls = []
        session.on_state_change(listener_calls.append)

        threads = [threading.Thread(target=session.submit, args=(ResetGame(),)) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(listener_calls) == 8
        assert session.state in listener_calls

    def test_events_of_one_command_stay_together(self, session):
        def apply(state, command):
            return CommandResult(state, tuple(DiceDiscarded(n) for n in range(3)))

        session.engine.apply = apply
        heard = []

        def slow_subscriber(event):
            heard.append((threading.current_thread().name, event.count))
            time.sleep(0.001)

        session.subscribe(slow_subscriber)
        threads = [
            threading.Thread(target=session.submit, args=(DiscardUnscored(),), name=f"submitter-{n}")
            for n in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(heard) == 12
        for start in range(0, 12, 3):
            run = heard[start:start + 3]
            assert {name for name, _ in run} == {run[0][0]}
            assert [count for _, count in run] == [0, 1, 2]
