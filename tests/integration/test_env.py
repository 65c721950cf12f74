"""环境层测试"""
import pytest
import numpy as np

from core.action import Action
from core.cards import str_to_cards
from core.config import Config
from core.engine import GameEngine
from core.game import Game
from core.joker import Jokers
from core.stage import Blind, End, Stage


class TestObservationBuilder:
    """ObservationBuilder 测试"""

    def test_shapes_match_build(self):
        from env.observation import ObservationBuilder

        builder = ObservationBuilder(Config())
        game = Game(seed=0)
        game.start()
        obs = builder.build(game).to_dict()

        for key, shape in builder.shapes().items():
            assert obs[key].shape == shape

    def test_pre_blind(self):
        from env.observation import ObservationBuilder

        game = Game(seed=0)
        game.start()
        obs = ObservationBuilder(Config()).build(game)

        assert obs.stage.tolist() == [1, 0, 0, 0, 0, 0, 0]
        assert obs.available[:8].sum() == 8
        assert obs.available[8:].sum() == 0
        assert obs.selected.sum() == 0
        assert obs.hand_levels.tolist() == [1] * 13

    def test_blind_and_selection(self):
        from env.observation import ObservationBuilder

        game = Game(seed=0)
        game.start()
        game.select_blind(Blind.SMALL)
        game.available = str_to_cards("2s Ah Kd")
        game.select_card(game.available[1])
        obs = ObservationBuilder(Config()).build(game)

        assert obs.stage.tolist() == [0, 1, 0, 0, 0, 0, 0]
        assert obs.selected[:3].tolist() == [0, 1, 0]
        assert obs.available[0, 0] == 1
        assert obs.available[1].argmax() == 12 + 13

    def test_scalars_in_unit_range(self):
        from env.observation import ObservationBuilder

        game = Game(seed=0)
        game.start()
        game.money = 1000
        game.select_blind(Blind.SMALL)
        game.score = 10000
        obs = ObservationBuilder(Config()).build(game)

        assert obs.scalars.min() >= 0
        assert obs.scalars.max() <= 1
        assert obs.scalars[2] == 1.0

    def test_jokers_and_shop(self):
        from env.observation import ObservationBuilder

        game = Game(seed=0)
        game.jokers = [Jokers.JOKER, Jokers.JOKER]
        game.shop.jokers = [Jokers.BANNER]
        obs = ObservationBuilder(Config()).build(game)

        assert obs.jokers[list(Jokers).index(Jokers.JOKER)] == 2
        assert obs.shop[0].sum() == 1
        assert obs.shop[1:].sum() == 0

    def test_to_flat_array(self):
        from env.observation import ObservationBuilder

        builder = ObservationBuilder(Config())
        game = Game(seed=0)
        flat = builder.build(game).to_flat_array()
        expected = sum(int(np.prod(s)) for s in builder.shapes().values())
        assert flat.shape == (expected,)
        assert flat.dtype == np.float32


class TestRewardCalculator:
    """RewardCalculator 测试"""

    def _blind_snapshots(self, score_after: int):
        engine = GameEngine(seed=0)
        engine.handle_action(Action.select_blind(Blind.SMALL))
        prev = engine.snapshot()
        engine.game.score = score_after
        return engine, prev

    def test_sparse(self):
        from env.reward import create_reward_calculator

        calc = create_reward_calculator("sparse")
        engine, prev = self._blind_snapshots(100)
        assert calc.compute(engine.snapshot(), prev) == 0.0

        engine.game.stage = Stage.ended(End.WIN)
        assert calc.compute(engine.snapshot(), prev) == 1.0
        engine.game.stage = Stage.ended(End.LOSE)
        assert calc.compute(engine.snapshot(), prev) == -1.0

    def test_shaped_progress(self):
        from env.reward import create_reward_calculator

        calc = create_reward_calculator("shaped")
        engine, prev = self._blind_snapshots(150)
        assert calc.compute(engine.snapshot(), prev) == pytest.approx(0.1 * 0.5)

    def test_shaped_pass(self):
        from env.reward import create_reward_calculator

        calc = create_reward_calculator("shaped")
        engine, prev = self._blind_snapshots(0)
        engine.game.stage = Stage.post_blind()
        assert calc.compute(engine.snapshot(), prev) == pytest.approx(0.1 + 0.1)

    def test_shaped_outside_blind(self):
        from env.reward import RewardCalculator

        engine = GameEngine(seed=0)
        snap = engine.snapshot()
        assert RewardCalculator().compute(snap, snap) == 0.0

    def test_from_dict(self):
        from env.reward import RewardConfig, RewardType

        config = RewardConfig.from_dict({"reward_type": "sparse", "win_reward": 5.0, "x": 1})
        assert config.reward_type == RewardType.SPARSE
        assert config.win_reward == 5.0


class TestBalatroEnv:
    """BalatroEnv 测试"""

    def test_reset(self):
        from env import BalatroEnv

        env = BalatroEnv()
        obs, info = env.reset(seed=42)

        assert env.observation_space.contains(obs)
        assert info["stage"] == "pre_blind"
        assert info["ante"] == 1
        assert info["action_mask"].shape == (79,)
        assert info["legal_action_indices"].tolist() == [78]

    def test_spaces(self):
        from env import BalatroEnv

        env = BalatroEnv(Config(available_max=10, store_consumable_slots_max=2))
        assert env.action_space.n == 35
        assert env.observation_space["available"].shape == (10, 52)
        assert env.observation_space["shop"].shape == (2, len(Jokers))

    def test_spaces_without_game(self):
        from env import BalatroEnv
        from core.space import ActionSpace

        config = Config(available_max=6, hand_size=6, store_consumable_slots_max=1)
        env = BalatroEnv(config)
        assert env.engine is None
        assert env.action_space.n == ActionSpace.from_config(config).size() == 22

    def test_step_before_reset(self):
        from env import BalatroEnv

        with pytest.raises(RuntimeError):
            BalatroEnv().step(0)

    def test_step(self):
        from env import BalatroEnv

        env = BalatroEnv()
        env.reset(seed=42)
        obs, reward, terminated, truncated, info = env.step(78)

        assert env.observation_space.contains(obs)
        assert "error" not in info
        assert info["stage"] == "blind(small)"
        assert info["required_score"] == 300
        assert not terminated
        assert not truncated
        assert reward == 0.0

    def test_step_with_action_object(self):
        from env import BalatroEnv

        env = BalatroEnv()
        env.reset(seed=42)
        _, _, _, _, info = env.step(Action.select_blind(Blind.SMALL))
        assert "error" not in info

    def test_masked_action_penalized(self):
        from env import BalatroEnv

        env = BalatroEnv()
        env.reset(seed=42)
        before = env.engine.snapshot()
        _, reward, terminated, _, info = env.step(77)

        assert reward == -1.0
        assert not terminated
        assert "masked" in info["error"]
        assert env.engine.snapshot() == before

    def test_out_of_range_penalized(self):
        from env import BalatroEnv

        env = BalatroEnv()
        env.reset(seed=42)
        _, reward, _, _, info = env.step(1000)
        assert reward == -1.0
        assert "InvalidIndex" in info["error"]

    def test_invalid_action_object(self):
        from env import BalatroEnv

        env = BalatroEnv()
        env.reset(seed=42)
        _, reward, _, _, info = env.step(Action.select_blind(Blind.BOSS))
        assert reward == -1.0
        assert info["error"].startswith("InvalidBlind")

    def test_bad_action_type(self):
        from env import BalatroEnv

        env = BalatroEnv()
        env.reset(seed=42)
        with pytest.raises(ValueError):
            env.step("play")

    def test_legal_actions(self):
        from env import BalatroEnv

        env = BalatroEnv()
        assert env.get_legal_actions() == []
        env.reset(seed=0)
        assert env.get_legal_actions() == [78]
        assert env.sample_action() == 78

    def test_random_rollout(self):
        from env import BalatroEnv

        env = BalatroEnv(max_steps=300)
        obs, info = env.reset(seed=0)

        done = False
        steps = 0
        while not done:
            action = env.sample_action()
            obs, reward, terminated, truncated, info = env.step(action)
            assert "error" not in info
            assert env.observation_space.contains(obs)
            done = terminated or truncated
            steps += 1

        assert steps <= 300
        if terminated:
            assert info["result"] in ("win", "lose")

    def test_same_seed_same_game(self):
        from env import BalatroEnv

        obs1, _ = BalatroEnv().reset(seed=9)
        obs2, _ = BalatroEnv().reset(seed=9)
        np.testing.assert_array_equal(obs1["available"], obs2["available"])

    def test_render(self):
        from env import BalatroEnv

        env = BalatroEnv(render_mode="ansi")
        env.reset(seed=0)
        output = env.render()
        assert "stage: pre_blind" in output


class TestWrappers:
    """包装器测试"""

    def test_flatten(self):
        from env import BalatroEnv, FlattenObservationWrapper

        env = FlattenObservationWrapper(BalatroEnv())
        obs, _ = env.reset(seed=0)
        assert obs.shape == env.observation_space.shape
        obs, _, _, _, _ = env.step(78)
        assert obs.shape == env.observation_space.shape

    def test_action_mask(self):
        from env import BalatroEnv, LegalActionMaskWrapper

        env = LegalActionMaskWrapper(BalatroEnv())
        obs, info = env.reset(seed=0)
        assert obs["action_mask"].dtype == np.int8
        np.testing.assert_array_equal(obs["action_mask"], info["action_mask"])

    def test_reward_scale(self):
        from env import BalatroEnv, RewardScaleWrapper

        env = RewardScaleWrapper(BalatroEnv(), scale=0.5)
        env.reset(seed=0)
        _, reward, _, _, _ = env.step(77)
        assert reward == -0.5

    def test_record_statistics(self):
        from env import BalatroEnv, RecordEpisodeStatistics

        env = RecordEpisodeStatistics(BalatroEnv(max_steps=3))
        env.reset(seed=0)
        env.step(78)
        env.step(78)
        _, _, _, truncated, info = env.step(0)

        assert truncated
        assert info["episode"]["l"] == 3
        assert info["episode"]["invalid"] == 1
        assert info["episode"]["ante"] == 1

    def test_wrap_env(self):
        from env import make_env, wrap_env

        env = wrap_env(make_env(max_steps=10), flatten_obs=True, action_mask=True)
        obs, _ = env.reset(seed=0)
        assert obs.ndim == 1
        assert obs.shape == env.observation_space.shape
