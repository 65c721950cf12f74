"""牌型等级与星球牌测试"""
import pytest

from core.hand import HandRank
from core.planet import Planetarium, Planets, BASE_LEVELS, LEVEL_UP


class TestPlanetarium:
    """Planetarium 测试"""

    def test_initial_levels(self):
        p = Planetarium()
        assert len(p.levels()) == 13
        for rank, (chips, mult) in BASE_LEVELS.items():
            level = p.level(rank)
            assert level.level == 1
            assert level.chips == chips
            assert level.mult == mult
            assert level.plays == 0

    def test_play_counts(self):
        p = Planetarium()
        p.play(HandRank.FLUSH)
        level = p.play(HandRank.FLUSH)
        assert level.plays == 2
        assert p.level(HandRank.FLUSH).plays == 2
        assert p.level(HandRank.STRAIGHT).plays == 0

    def test_level_up_high_card(self):
        p = Planetarium()
        p.level_up(HandRank.HIGH_CARD)
        level = p.level(HandRank.HIGH_CARD)
        assert (level.level, level.chips, level.mult) == (2, 15, 2)

    def test_level_up_three_of_a_kind_adds_two_levels(self):
        p = Planetarium()
        p.level_up(HandRank.THREE_OF_A_KIND)
        assert p.level(HandRank.THREE_OF_A_KIND).level == 3

    def test_level_up_flush_five(self):
        p = Planetarium()
        p.level_up(HandRank.FLUSH_FIVE)
        level = p.level(HandRank.FLUSH_FIVE)
        assert (level.chips, level.mult) == (210, 19)

    def test_straight_flush_raises_royal_flush(self):
        p = Planetarium()
        p.level_up(HandRank.STRAIGHT_FLUSH)
        sf = p.level(HandRank.STRAIGHT_FLUSH)
        rf = p.level(HandRank.ROYAL_FLUSH)
        assert (sf.level, sf.chips, sf.mult) == (2, 140, 12)
        assert (rf.level, rf.chips, rf.mult) == (2, 140, 12)

    def test_royal_flush_not_levelable(self):
        p = Planetarium()
        p.level_up(HandRank.ROYAL_FLUSH)
        assert p.level(HandRank.ROYAL_FLUSH).level == 1

    def test_level_up_keeps_plays(self):
        p = Planetarium()
        p.play(HandRank.ONE_PAIR)
        p.level_up(HandRank.ONE_PAIR)
        assert p.level(HandRank.ONE_PAIR).plays == 1

    def test_every_levelable_rank_has_rule(self):
        for rank in HandRank:
            if rank != HandRank.ROYAL_FLUSH:
                assert rank in LEVEL_UP


class TestPlanets:
    """星球牌测试"""

    @pytest.mark.parametrize("planet,rank", [
        (Planets.PLUTO, HandRank.HIGH_CARD),
        (Planets.MERCURY, HandRank.ONE_PAIR),
        (Planets.URANUS, HandRank.TWO_PAIR),
        (Planets.VENUS, HandRank.THREE_OF_A_KIND),
        (Planets.SATURN, HandRank.STRAIGHT),
        (Planets.JUPITER, HandRank.FLUSH),
        (Planets.EARTH, HandRank.FULL_HOUSE),
        (Planets.MARS, HandRank.FOUR_OF_A_KIND),
        (Planets.NEPTUNE, HandRank.STRAIGHT_FLUSH),
        (Planets.PLANET_X, HandRank.FIVE_OF_A_KIND),
        (Planets.CERES, HandRank.FLUSH_HOUSE),
        (Planets.ERIS, HandRank.FLUSH_FIVE),
    ])
    def test_hand_rank(self, planet, rank):
        assert planet.hand_rank == rank

    def test_names(self):
        assert Planets.PLANET_X.display_name == "Planet X"
        assert "Flush" in Planets.JUPITER.description

    def test_effect_levels_game_planetarium(self):
        class FakeGame:
            planetarium = Planetarium()

        game = FakeGame()
        Planets.MERCURY.effect(game)
        assert game.planetarium.level(HandRank.ONE_PAIR).level == 2
