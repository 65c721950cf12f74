"""
牌型定义与最佳牌型评估

支持 1-5 张牌，包含 Balatro 特有牌型 (五条 / 同花葫芦 / 同花五条)
只有构成牌型的牌 (计分牌) 进入 MadeHand.hand
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import Tuple, List, Dict, FrozenSet, Iterable
from collections import Counter

from .cards import Card, Value
from .errors import TooManyCards, NoCards

# 一次出牌的最大张数
MAX_HAND_SIZE = 5


class HandRank(IntEnum):
    """牌型 (数值越大越强)"""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9
    FIVE_OF_A_KIND = 10
    FLUSH_HOUSE = 11
    FLUSH_FIVE = 12


# 每种牌型"包含"的子牌型 (用于小丑牌触发条件)
HAND_CONTAINS: Dict[HandRank, FrozenSet[HandRank]] = {
    HandRank.HIGH_CARD: frozenset({HandRank.HIGH_CARD}),
    HandRank.ONE_PAIR: frozenset({HandRank.ONE_PAIR}),
    HandRank.TWO_PAIR: frozenset({HandRank.TWO_PAIR, HandRank.ONE_PAIR}),
    HandRank.THREE_OF_A_KIND: frozenset({HandRank.THREE_OF_A_KIND, HandRank.ONE_PAIR}),
    HandRank.STRAIGHT: frozenset({HandRank.STRAIGHT}),
    HandRank.FLUSH: frozenset({HandRank.FLUSH}),
    HandRank.FULL_HOUSE: frozenset({
        HandRank.FULL_HOUSE, HandRank.THREE_OF_A_KIND, HandRank.TWO_PAIR, HandRank.ONE_PAIR,
    }),
    HandRank.FOUR_OF_A_KIND: frozenset({
        HandRank.FOUR_OF_A_KIND, HandRank.THREE_OF_A_KIND, HandRank.ONE_PAIR,
    }),
    HandRank.STRAIGHT_FLUSH: frozenset({HandRank.STRAIGHT_FLUSH, HandRank.STRAIGHT, HandRank.FLUSH}),
    HandRank.ROYAL_FLUSH: frozenset({
        HandRank.ROYAL_FLUSH, HandRank.STRAIGHT_FLUSH, HandRank.STRAIGHT, HandRank.FLUSH,
    }),
    HandRank.FIVE_OF_A_KIND: frozenset({
        HandRank.FIVE_OF_A_KIND, HandRank.FOUR_OF_A_KIND, HandRank.THREE_OF_A_KIND, HandRank.ONE_PAIR,
    }),
    HandRank.FLUSH_HOUSE: frozenset({
        HandRank.FLUSH_HOUSE, HandRank.FULL_HOUSE, HandRank.THREE_OF_A_KIND,
        HandRank.ONE_PAIR, HandRank.FLUSH,
    }),
    HandRank.FLUSH_FIVE: frozenset({
        HandRank.FLUSH_FIVE, HandRank.FIVE_OF_A_KIND, HandRank.FOUR_OF_A_KIND,
        HandRank.THREE_OF_A_KIND, HandRank.ONE_PAIR, HandRank.FLUSH,
    }),
}

_ROYAL_VALUES = frozenset({Value.TEN, Value.JACK, Value.QUEEN, Value.KING, Value.ACE})
_WHEEL_VALUES = frozenset({Value.ACE, Value.TWO, Value.THREE, Value.FOUR, Value.FIVE})


@dataclass(frozen=True)
class SelectHand:
    """
    选中的牌 (保持顺序，1-5 张)

    Attributes:
        cards: 牌元组
    """
    cards: Tuple[Card, ...]

    def __init__(self, cards: Iterable[Card]):
        object.__setattr__(self, 'cards', tuple(cards))

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def chips(self) -> int:
        return sum(c.chips() for c in self.cards)

    def best_hand(self) -> 'MadeHand':
        """
        评估最佳牌型

        Raises:
            NoCards: 没有牌
            TooManyCards: 超过 5 张
        """
        return best_hand(self.cards)


@dataclass(frozen=True)
class MadeHand:
    """
    评估后的牌型

    Attributes:
        hand: 计分牌 (构成牌型的牌)
        rank: 牌型
        all: 全部打出的牌
    """
    hand: SelectHand
    rank: HandRank
    all: SelectHand

    def contains(self, rank: HandRank) -> bool:
        """牌型是否包含指定子牌型"""
        return rank in HAND_CONTAINS[self.rank]


def best_hand(cards: Iterable[Card]) -> MadeHand:
    cards = list(cards)
    n = len(cards)
    if n == 0:
        raise NoCards()
    if n > MAX_HAND_SIZE:
        raise TooManyCards()

    played = SelectHand(cards)
    counter = Counter(c.value for c in cards)
    counts = sorted(counter.values(), reverse=True)

    is_flush = _is_flush(cards)
    is_straight = _is_straight(cards)
    full = counts[0] >= 3 and len(counts) >= 2 and counts[1] >= 2

    def made(rank: HandRank, scoring: List[Card]) -> MadeHand:
        return MadeHand(hand=SelectHand(scoring), rank=rank, all=played)

    if counts[0] == 5 and is_flush:
        return made(HandRank.FLUSH_FIVE, cards)
    if full and is_flush:
        return made(HandRank.FLUSH_HOUSE, cards)
    if counts[0] == 5:
        return made(HandRank.FIVE_OF_A_KIND, cards)
    if is_straight and is_flush:
        if {c.value for c in cards} == _ROYAL_VALUES:
            return made(HandRank.ROYAL_FLUSH, cards)
        return made(HandRank.STRAIGHT_FLUSH, cards)
    if counts[0] == 4:
        return made(HandRank.FOUR_OF_A_KIND, _cards_with_count(cards, counter, 4))
    if full:
        return made(HandRank.FULL_HOUSE, cards)
    if is_flush:
        return made(HandRank.FLUSH, cards)
    if is_straight:
        return made(HandRank.STRAIGHT, cards)
    if counts[0] == 3:
        return made(HandRank.THREE_OF_A_KIND, _cards_with_count(cards, counter, 3))
    if counts[0] == 2:
        scoring = _cards_with_count(cards, counter, 2)
        if len(counts) >= 2 and counts[1] == 2:
            return made(HandRank.TWO_PAIR, scoring)
        return made(HandRank.ONE_PAIR, scoring)

    # 高牌只有最大的一张计分
    highest = max(cards, key=lambda c: c.value)
    return made(HandRank.HIGH_CARD, [highest])


def _cards_with_count(cards: List[Card], counter: Counter, count: int) -> List[Card]:
    """按原顺序取出出现次数等于 count 的牌"""
    return [c for c in cards if counter[c.value] == count]


def _is_flush(cards: List[Card]) -> bool:
    if len(cards) != MAX_HAND_SIZE:
        return False
    return len({c.suit for c in cards}) == 1


def _is_straight(cards: List[Card]) -> bool:
    if len(cards) != MAX_HAND_SIZE:
        return False
    values = sorted({c.value for c in cards})
    if len(values) != MAX_HAND_SIZE:
        return False
    if values[-1] - values[0] == 4:
        return True
    return set(values) == _WHEEL_VALUES
