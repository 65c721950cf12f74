"""
小丑牌目录

小丑牌是封闭集合，每种小丑牌提供:
- 名称 / 描述 / 稀有度 / 类别 / 价格
- effects(game): 产生的效果钩子 (目前只有 ON_SCORE)
- apply(game, hand): 计分时按类型分派执行效果

小丑牌按获得顺序依次执行，后执行的效果可以看到先执行效果的修改
"""
from enum import Enum
from dataclasses import dataclass
from typing import List, Dict, Tuple, TYPE_CHECKING

from .cards import Suit, Value
from .hand import HandRank, MadeHand
from .effect import Effect, EffectTrigger

if TYPE_CHECKING:
    from .game import Game


class Rarity(Enum):
    """稀有度"""
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"


class Categories(Enum):
    """效果类别"""
    MULT_PLUS = "mult_plus"
    MULT_MULT = "mult_mult"
    CHIPS = "chips"
    ECONOMY = "economy"
    RETRIGGER = "retrigger"
    EFFECT = "effect"


@dataclass(frozen=True)
class JokerSpec:
    """小丑牌静态定义"""
    name: str
    desc: str
    rarity: Rarity
    categories: Tuple[Categories, ...]
    cost: int


class Jokers(Enum):
    """全部小丑牌"""
    JOKER = "joker"
    GREEDY_JOKER = "greedy_joker"
    LUSTY_JOKER = "lusty_joker"
    WRATHFUL_JOKER = "wrathful_joker"
    GLUTTONOUS_JOKER = "gluttonous_joker"
    JOLLY_JOKER = "jolly_joker"
    ZANY_JOKER = "zany_joker"
    MAD_JOKER = "mad_joker"
    CRAZY_JOKER = "crazy_joker"
    DROLL_JOKER = "droll_joker"
    SLY_JOKER = "sly_joker"
    WILY_JOKER = "wily_joker"
    CLEVER_JOKER = "clever_joker"
    DEVIOUS_JOKER = "devious_joker"
    CRAFTY_JOKER = "crafty_joker"
    HALF_JOKER = "half_joker"
    BANNER = "banner"
    MYSTIC_SUMMIT = "mystic_summit"
    ABSTRACT_JOKER = "abstract_joker"
    SCHOLAR = "scholar"
    EVEN_STEVEN = "even_steven"
    ODD_TODD = "odd_todd"
    SUPERNOVA = "supernova"

    @property
    def spec(self) -> JokerSpec:
        return JOKER_SPECS[self]

    @property
    def display_name(self) -> str:
        return self.spec.name

    @property
    def description(self) -> str:
        return self.spec.desc

    @property
    def rarity(self) -> Rarity:
        return self.spec.rarity

    @property
    def categories(self) -> Tuple[Categories, ...]:
        return self.spec.categories

    @property
    def cost(self) -> int:
        return self.spec.cost

    @classmethod
    def by_rarity(cls, rarity: Rarity) -> List['Jokers']:
        return [j for j in cls if j.rarity == rarity]

    def effects(self, game: 'Game') -> List[Effect]:
        """产生效果钩子 (当前所有小丑牌都只在计分时触发)"""
        return [Effect(EffectTrigger.ON_SCORE, self)]

    def apply(self, game: 'Game', hand: MadeHand):
        """
        计分时执行效果，直接修改 game.chips / game.mult

        Args:
            game: 当前游戏
            hand: 正在计分的牌型
        """
        scoring = hand.hand.cards

        if self == Jokers.JOKER:
            game.mult += 4

        # 花色
        elif self == Jokers.GREEDY_JOKER:
            game.mult += 3 * _count_suit(scoring, Suit.DIAMOND)
        elif self == Jokers.LUSTY_JOKER:
            game.mult += 3 * _count_suit(scoring, Suit.HEART)
        elif self == Jokers.WRATHFUL_JOKER:
            game.mult += 3 * _count_suit(scoring, Suit.SPADE)
        elif self == Jokers.GLUTTONOUS_JOKER:
            game.mult += 3 * _count_suit(scoring, Suit.CLUB)

        # 牌型倍率
        elif self == Jokers.JOLLY_JOKER:
            if hand.contains(HandRank.ONE_PAIR):
                game.mult += 8
        elif self == Jokers.ZANY_JOKER:
            if hand.contains(HandRank.THREE_OF_A_KIND):
                game.mult += 12
        elif self == Jokers.MAD_JOKER:
            if hand.contains(HandRank.TWO_PAIR):
                game.mult += 10
        elif self == Jokers.CRAZY_JOKER:
            if hand.contains(HandRank.STRAIGHT):
                game.mult += 12
        elif self == Jokers.DROLL_JOKER:
            if hand.contains(HandRank.FLUSH):
                game.mult += 10

        # 牌型筹码
        elif self == Jokers.SLY_JOKER:
            if hand.contains(HandRank.ONE_PAIR):
                game.chips += 50
        elif self == Jokers.WILY_JOKER:
            if hand.contains(HandRank.THREE_OF_A_KIND):
                game.chips += 100
        elif self == Jokers.CLEVER_JOKER:
            if hand.contains(HandRank.TWO_PAIR):
                game.chips += 80
        elif self == Jokers.DEVIOUS_JOKER:
            if hand.contains(HandRank.STRAIGHT):
                game.chips += 100
        elif self == Jokers.CRAFTY_JOKER:
            if hand.contains(HandRank.FLUSH):
                game.chips += 80

        # 依赖游戏状态
        elif self == Jokers.HALF_JOKER:
            if len(hand.all) <= 3:
                game.mult += 20
        elif self == Jokers.BANNER:
            game.chips += 30 * game.discards
        elif self == Jokers.MYSTIC_SUMMIT:
            if game.discards == 0:
                game.mult += 15
        elif self == Jokers.ABSTRACT_JOKER:
            game.mult += 3 * len(game.jokers)
        elif self == Jokers.SUPERNOVA:
            game.mult += game.planetarium.level(hand.rank).plays

        # 计分牌点数
        elif self == Jokers.SCHOLAR:
            aces = sum(1 for c in scoring if c.value == Value.ACE)
            game.chips += 20 * aces
            game.mult += 4 * aces
        elif self == Jokers.EVEN_STEVEN:
            game.mult += 4 * sum(1 for c in scoring if c.value <= Value.TEN and c.value % 2 == 0)
        elif self == Jokers.ODD_TODD:
            game.chips += 31 * sum(
                1 for c in scoring
                if c.value == Value.ACE or (c.value <= Value.TEN and c.value % 2 == 1)
            )

        else:
            raise NotImplementedError(f"No scoring rule for joker {self.name}")


def _count_suit(cards, suit: Suit) -> int:
    return sum(1 for c in cards if c.suit == suit)


_C = Categories

JOKER_SPECS: Dict[Jokers, JokerSpec] = {
    Jokers.JOKER: JokerSpec("Joker", "+4 Mult", Rarity.COMMON, (_C.MULT_PLUS,), 2),
    Jokers.GREEDY_JOKER: JokerSpec(
        "Greedy Joker", "+3 Mult for each scored Diamond", Rarity.COMMON, (_C.MULT_PLUS,), 5),
    Jokers.LUSTY_JOKER: JokerSpec(
        "Lusty Joker", "+3 Mult for each scored Heart", Rarity.COMMON, (_C.MULT_PLUS,), 5),
    Jokers.WRATHFUL_JOKER: JokerSpec(
        "Wrathful Joker", "+3 Mult for each scored Spade", Rarity.COMMON, (_C.MULT_PLUS,), 5),
    Jokers.GLUTTONOUS_JOKER: JokerSpec(
        "Gluttonous Joker", "+3 Mult for each scored Club", Rarity.COMMON, (_C.MULT_PLUS,), 5),
    Jokers.JOLLY_JOKER: JokerSpec(
        "Jolly Joker", "+8 Mult if hand contains a Pair", Rarity.COMMON, (_C.MULT_PLUS,), 3),
    Jokers.ZANY_JOKER: JokerSpec(
        "Zany Joker", "+12 Mult if hand contains a Three of a Kind", Rarity.COMMON, (_C.MULT_PLUS,), 4),
    Jokers.MAD_JOKER: JokerSpec(
        "Mad Joker", "+10 Mult if hand contains a Two Pair", Rarity.COMMON, (_C.MULT_PLUS,), 4),
    Jokers.CRAZY_JOKER: JokerSpec(
        "Crazy Joker", "+12 Mult if hand contains a Straight", Rarity.COMMON, (_C.MULT_PLUS,), 4),
    Jokers.DROLL_JOKER: JokerSpec(
        "Droll Joker", "+10 Mult if hand contains a Flush", Rarity.COMMON, (_C.MULT_PLUS,), 4),
    Jokers.SLY_JOKER: JokerSpec(
        "Sly Joker", "+50 Chips if hand contains a Pair", Rarity.COMMON, (_C.CHIPS,), 3),
    Jokers.WILY_JOKER: JokerSpec(
        "Wily Joker", "+100 Chips if hand contains a Three of a Kind", Rarity.COMMON, (_C.CHIPS,), 4),
    Jokers.CLEVER_JOKER: JokerSpec(
        "Clever Joker", "+80 Chips if hand contains a Two Pair", Rarity.COMMON, (_C.CHIPS,), 4),
    Jokers.DEVIOUS_JOKER: JokerSpec(
        "Devious Joker", "+100 Chips if hand contains a Straight", Rarity.COMMON, (_C.CHIPS,), 4),
    Jokers.CRAFTY_JOKER: JokerSpec(
        "Crafty Joker", "+80 Chips if hand contains a Flush", Rarity.COMMON, (_C.CHIPS,), 4),
    Jokers.HALF_JOKER: JokerSpec(
        "Half Joker", "+20 Mult if played hand contains 3 or fewer cards",
        Rarity.COMMON, (_C.MULT_PLUS,), 5),
    Jokers.BANNER: JokerSpec(
        "Banner", "+30 Chips for each remaining discard", Rarity.COMMON, (_C.CHIPS,), 5),
    Jokers.MYSTIC_SUMMIT: JokerSpec(
        "Mystic Summit", "+15 Mult when 0 discards remaining", Rarity.COMMON, (_C.MULT_PLUS,), 5),
    Jokers.ABSTRACT_JOKER: JokerSpec(
        "Abstract Joker", "+3 Mult for each Joker card", Rarity.COMMON, (_C.MULT_PLUS,), 4),
    Jokers.SCHOLAR: JokerSpec(
        "Scholar", "Played Aces give +20 Chips and +4 Mult when scored",
        Rarity.COMMON, (_C.CHIPS, _C.MULT_PLUS), 4),
    Jokers.EVEN_STEVEN: JokerSpec(
        "Even Steven", "Played cards with even rank give +4 Mult when scored",
        Rarity.COMMON, (_C.MULT_PLUS,), 4),
    Jokers.ODD_TODD: JokerSpec(
        "Odd Todd", "Played cards with odd rank give +31 Chips when scored",
        Rarity.COMMON, (_C.CHIPS,), 4),
    Jokers.SUPERNOVA: JokerSpec(
        "Supernova", "Adds the number of times poker hand has been played this run to Mult",
        Rarity.COMMON, (_C.MULT_PLUS,), 5),
}
