"""GameEngine 门面测试"""
import threading

import numpy as np
import pytest

from core.action import Action, ActionType
from core.config import Config
from core.engine import GameEngine, GameSnapshot
from core.errors import InvalidAction, InvalidIndex
from core.planet import Planets
from core.hand import HandRank
from core.stage import Blind, Stage


class TestEngine:
    """基本功能测试"""

    def test_starts_in_pre_blind(self):
        engine = GameEngine(seed=0)
        snap = engine.snapshot()
        assert isinstance(snap, GameSnapshot)
        assert snap.stage == Stage.pre_blind()
        assert len(snap.available) == 8
        assert snap.deck_size == 44
        assert snap.required_score is None
        assert snap.history == ()

    def test_snapshot_is_frozen(self):
        snap = GameEngine(seed=0).snapshot()
        with pytest.raises(AttributeError):
            snap.money = 100

    def test_snapshot_is_a_copy(self):
        engine = GameEngine(seed=0)
        snap = engine.snapshot()
        engine.handle_action(Action.select_blind(Blind.SMALL))
        assert snap.stage == Stage.pre_blind()
        assert engine.snapshot().required_score == 300

    def test_seed_is_reproducible(self):
        a, b = GameEngine(seed=3), GameEngine(seed=3)
        assert a.snapshot().available == b.snapshot().available

    def test_reset(self):
        engine = GameEngine(seed=1)
        engine.handle_action_index(78)
        snap = engine.reset(seed=1)
        assert snap.stage == Stage.pre_blind()
        assert snap.history == ()
        assert snap.available == GameEngine(seed=1).snapshot().available

    def test_action_space(self):
        engine = GameEngine(seed=0)
        mask = engine.gen_action_space()
        assert isinstance(mask, np.ndarray)
        assert len(mask) == engine.action_space_size() == 79
        assert np.flatnonzero(mask).tolist() == [78]

    def test_gen_actions_and_moves(self):
        engine = GameEngine(seed=0)
        assert engine.gen_actions() == [Action.select_blind(Blind.SMALL)]
        engine.handle_action(Action.select_blind(Blind.SMALL))
        actions = engine.gen_actions()
        assert all(a.action_type == ActionType.SELECT_CARD for a in actions)
        moves = engine.gen_moves()
        assert moves[0].action_type == ActionType.PLAY

    def test_handle_action_index(self):
        engine = GameEngine(seed=0)
        action = engine.handle_action_index(78)
        assert action == Action.select_blind(Blind.SMALL)
        assert engine.snapshot().history == (action,)

    def test_masked_index_rejected(self):
        engine = GameEngine(seed=0)
        engine.handle_action_index(78)
        before = engine.snapshot()
        with pytest.raises(InvalidAction):
            engine.handle_action_index(24)
        assert engine.snapshot() == before

    def test_invalid_index(self):
        engine = GameEngine(seed=0)
        with pytest.raises(InvalidIndex):
            engine.action_from_index(1000)

    def test_invalid_action_keeps_state(self):
        engine = GameEngine(seed=0)
        before = engine.snapshot()
        with pytest.raises(InvalidAction):
            engine.handle_action(Action.next_round())
        assert engine.snapshot() == before

    def test_use_planet(self):
        engine = GameEngine(seed=0)
        engine.use_planet(Planets.MERCURY)
        assert engine.game.planetarium.level(HandRank.ONE_PAIR).level == 2

    def test_custom_config(self):
        engine = GameEngine(Config(available_max=10, store_consumable_slots_max=2), seed=0)
        assert engine.action_space_size() == 3 * 10 + 2 + 3
        assert not engine.is_over()
        assert engine.result() is None
        assert not engine.is_win()


class TestConcurrency:
    """并发访问测试"""

    def test_parallel_readers_and_writer(self):
        engine = GameEngine(seed=0)
        engine.handle_action(Action.select_blind(Blind.SMALL))
        errors = []

        def reader():
            try:
                for _ in range(50):
                    snap = engine.snapshot()
                    assert len(snap.selected) <= 5
                    assert set(snap.selected) <= set(snap.available)
            except AssertionError as e:
                errors.append(e)

        def writer():
            for _ in range(50):
                index = int(np.flatnonzero(engine.gen_action_space())[0])
                with engine._lock:
                    if engine.game.stage.is_blind() and len(engine.game.selected) < 5:
                        engine.handle_action_index(index)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        threads.append(threading.Thread(target=writer))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
