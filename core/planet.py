"""
牌型等级 (Planetarium) 与星球牌

每种牌型有独立的等级、基础筹码、基础倍率和累计出牌次数
星球牌直接永久提升对应牌型的等级，不经过效果注册表
"""
from enum import Enum
from dataclasses import dataclass, replace
from typing import Dict, Tuple, TYPE_CHECKING

from .hand import HandRank

if TYPE_CHECKING:
    from .game import Game


@dataclass(frozen=True)
class Level:
    """
    单个牌型的计分参数

    Attributes:
        level: 等级
        chips: 基础筹码
        mult: 基础倍率
        plays: 累计出牌次数
    """
    level: int
    chips: int
    mult: int
    plays: int = 0


# 1 级时的 (筹码, 倍率)
BASE_LEVELS: Dict[HandRank, Tuple[int, int]] = {
    HandRank.HIGH_CARD: (5, 1),
    HandRank.ONE_PAIR: (10, 2),
    HandRank.TWO_PAIR: (20, 2),
    HandRank.THREE_OF_A_KIND: (30, 3),
    HandRank.STRAIGHT: (30, 4),
    HandRank.FLUSH: (35, 4),
    HandRank.FULL_HOUSE: (40, 4),
    HandRank.FOUR_OF_A_KIND: (60, 7),
    HandRank.STRAIGHT_FLUSH: (100, 8),
    HandRank.ROYAL_FLUSH: (100, 8),
    HandRank.FIVE_OF_A_KIND: (120, 12),
    HandRank.FLUSH_HOUSE: (140, 14),
    HandRank.FLUSH_FIVE: (160, 16),
}

# 每次升级的 (等级, 筹码, 倍率) 增量
# 皇家同花顺没有独立的升级路径，跟随同花顺一起升级
LEVEL_UP: Dict[HandRank, Tuple[int, int, int]] = {
    HandRank.HIGH_CARD: (1, 10, 1),
    HandRank.ONE_PAIR: (1, 15, 1),
    HandRank.TWO_PAIR: (1, 20, 1),
    HandRank.THREE_OF_A_KIND: (2, 20, 1),
    HandRank.STRAIGHT: (1, 30, 3),
    HandRank.FLUSH: (1, 15, 2),
    HandRank.FULL_HOUSE: (1, 25, 2),
    HandRank.FOUR_OF_A_KIND: (1, 30, 3),
    HandRank.STRAIGHT_FLUSH: (1, 40, 4),
    HandRank.FIVE_OF_A_KIND: (1, 35, 3),
    HandRank.FLUSH_HOUSE: (1, 40, 4),
    HandRank.FLUSH_FIVE: (1, 50, 3),
}


class Planetarium:
    """牌型等级表 (全部 13 种牌型)"""

    def __init__(self):
        self._levels: Dict[HandRank, Level] = {
            rank: Level(level=1, chips=chips, mult=mult)
            for rank, (chips, mult) in BASE_LEVELS.items()
        }

    def level(self, rank: HandRank) -> Level:
        return self._levels[rank]

    def play(self, rank: HandRank) -> Level:
        """记录一次出牌并返回该牌型当前等级"""
        current = self._levels[rank]
        self._levels[rank] = replace(current, plays=current.plays + 1)
        return self._levels[rank]

    def level_up(self, rank: HandRank):
        """按牌型的升级规则提升等级"""
        if rank == HandRank.ROYAL_FLUSH:
            return
        self._apply_level_up(rank, LEVEL_UP[rank])
        if rank == HandRank.STRAIGHT_FLUSH:
            self._apply_level_up(HandRank.ROYAL_FLUSH, LEVEL_UP[rank])

    def _apply_level_up(self, rank: HandRank, delta: Tuple[int, int, int]):
        d_level, d_chips, d_mult = delta
        current = self._levels[rank]
        self._levels[rank] = replace(
            current,
            level=current.level + d_level,
            chips=current.chips + d_chips,
            mult=current.mult + d_mult,
        )

    def levels(self) -> Dict[HandRank, Level]:
        return dict(self._levels)


class Planets(Enum):
    """星球牌 (封闭集合)"""
    PLUTO = "Pluto"
    MERCURY = "Mercury"
    URANUS = "Uranus"
    VENUS = "Venus"
    SATURN = "Saturn"
    JUPITER = "Jupiter"
    EARTH = "Earth"
    MARS = "Mars"
    NEPTUNE = "Neptune"
    PLANET_X = "Planet X"
    CERES = "Ceres"
    ERIS = "Eris"

    @property
    def hand_rank(self) -> HandRank:
        return PLANET_HAND_RANK[self]

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return f"Level up {self.hand_rank.name.replace('_', ' ').title()}"

    def effect(self, game: 'Game'):
        """立即提升对应牌型等级"""
        game.planetarium.level_up(self.hand_rank)


PLANET_HAND_RANK: Dict[Planets, HandRank] = {
    Planets.PLUTO: HandRank.HIGH_CARD,
    Planets.MERCURY: HandRank.ONE_PAIR,
    Planets.URANUS: HandRank.TWO_PAIR,
    Planets.VENUS: HandRank.THREE_OF_A_KIND,
    Planets.SATURN: HandRank.STRAIGHT,
    Planets.JUPITER: HandRank.FLUSH,
    Planets.EARTH: HandRank.FULL_HOUSE,
    Planets.MARS: HandRank.FOUR_OF_A_KIND,
    Planets.NEPTUNE: HandRank.STRAIGHT_FLUSH,
    Planets.PLANET_X: HandRank.FIVE_OF_A_KIND,
    Planets.CERES: HandRank.FLUSH_HOUSE,
    Planets.ERIS: HandRank.FLUSH_FIVE,
}
