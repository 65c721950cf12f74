"""阶段 / 底注 / 配置测试"""
import pytest

from core.ante import Ante
from core.config import Config
from core.stage import Blind, End, Stage, StageKind


class TestAnte:
    """Ante 测试"""

    def test_base(self):
        assert Ante.ZERO.base() == 100
        assert Ante.ONE.base() == 300
        assert Ante.EIGHT.base() == 50000

    def test_next(self):
        assert Ante.ONE.next() == Ante.TWO
        assert Ante.SEVEN.next() == Ante.EIGHT
        assert Ante.EIGHT.next() is None


class TestBlind:
    """Blind 测试"""

    def test_reward(self):
        assert Blind.SMALL.reward() == 3
        assert Blind.BIG.reward() == 4
        assert Blind.BOSS.reward() == 5

    def test_next_cycles(self):
        assert Blind.SMALL.next() == Blind.BIG
        assert Blind.BIG.next() == Blind.BOSS
        assert Blind.BOSS.next() == Blind.SMALL


class TestStage:
    """Stage 测试"""

    def test_is_blind(self):
        assert Stage.in_blind(Blind.BIG).is_blind()
        assert not Stage.pre_blind().is_blind()
        assert not Stage.shop().is_blind()

    def test_is_end(self):
        assert Stage.ended(End.WIN).is_end
        assert not Stage.post_blind().is_end

    def test_equality(self):
        assert Stage.in_blind(Blind.SMALL) == Stage.in_blind(Blind.SMALL)
        assert Stage.in_blind(Blind.SMALL) != Stage.in_blind(Blind.BIG)

    def test_str(self):
        assert str(Stage.in_blind(Blind.BOSS)) == "blind(boss)"
        assert str(Stage.ended(End.LOSE)) == "end(lose)"
        assert str(Stage.shop()) == "shop"

    def test_kind(self):
        assert Stage.post_blind().kind == StageKind.POST_BLIND


class TestConfig:
    """Config 测试"""

    def test_defaults(self):
        config = Config()
        assert config.selected_max == 5
        assert config.available_max == 24
        assert config.joker_slots == 5
        assert config.store_consumable_slots_max == 4
        assert config.ante_end == Ante.EIGHT

    def test_from_dict_ignores_unknown(self):
        config = Config.from_dict({"available_max": 10, "hand_size": 6, "unknown": 1})
        assert config.available_max == 10
        assert config.hand_size == 6

    def test_ante_coerced(self):
        assert Config(ante_end=3).ante_end == Ante.THREE

    @pytest.mark.parametrize("kwargs", [
        {"available_max": 1},
        {"store_consumable_slots_max": -1},
        {"selected_max": 0},
        {"available_max": 6, "hand_size": 8},
        {"ante_start": 3, "ante_end": 2},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            Config(**kwargs)
