"""
牌的定义与牌堆

标准 52 张扑克牌:
- 2-10, J, Q, K, A 各 4 种花色
- 每张牌带有唯一 id，用于区分同点同花色的牌
"""
from enum import Enum, IntEnum
from dataclasses import dataclass
from typing import List, Optional, Iterable
import random

import numpy as np


class Value(IntEnum):
    """牌面值 (A 最大)"""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def chips(self) -> int:
        """计分时的筹码值"""
        if self == Value.ACE:
            return 11
        if self >= Value.JACK:
            return 10
        return int(self)

    @property
    def is_face(self) -> bool:
        return self in (Value.JACK, Value.QUEEN, Value.KING)


class Suit(str, Enum):
    """花色"""
    SPADE = "spade"
    HEART = "heart"
    CLUB = "club"
    DIAMOND = "diamond"


# 牌面值到显示字符的映射
VALUE_TO_STR = {
    Value.TWO: '2', Value.THREE: '3', Value.FOUR: '4', Value.FIVE: '5',
    Value.SIX: '6', Value.SEVEN: '7', Value.EIGHT: '8', Value.NINE: '9',
    Value.TEN: 'T', Value.JACK: 'J', Value.QUEEN: 'Q', Value.KING: 'K',
    Value.ACE: 'A',
}

SUIT_TO_STR = {
    Suit.SPADE: 's',
    Suit.HEART: 'h',
    Suit.CLUB: 'c',
    Suit.DIAMOND: 'd',
}

STR_TO_VALUE = {v: k for k, v in VALUE_TO_STR.items()}
STR_TO_SUIT = {v: k for k, v in SUIT_TO_STR.items()}

SUIT_ORDER = (Suit.SPADE, Suit.HEART, Suit.CLUB, Suit.DIAMOND)


@dataclass(frozen=True, slots=True)
class Card:
    """
    不可变的牌

    Attributes:
        value: 牌面值
        suit: 花色
        id: 牌堆内唯一编号 (手工构造的牌默认为 0)
    """
    value: Value
    suit: Suit
    id: int = 0

    def chips(self) -> int:
        return self.value.chips()

    @classmethod
    def from_str(cls, s: str, id: int = 0) -> 'Card':
        """从 "Ah" / "Td" 形式的字符串创建"""
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s!r}")
        return cls(STR_TO_VALUE[s[0].upper()], STR_TO_SUIT[s[1].lower()], id)

    def __str__(self) -> str:
        return f"{VALUE_TO_STR[self.value]}{SUIT_TO_STR[self.suit]}"


def str_to_cards(s: str) -> List[Card]:
    """
    将空格分隔的字符串转换为牌列表

    id 按位置从 0 递增，同一字符串中重复的牌仍是不同的牌

    Args:
        s: 如 "Ah Kd Jc"

    Returns:
        牌列表
    """
    return [Card.from_str(token, i) for i, token in enumerate(s.split())]


def cards_to_str(cards: Iterable[Card]) -> str:
    return ' '.join(str(c) for c in cards)


def card_index(card: Card) -> int:
    """牌在 52 维编码中的位置 (花色 x 13 + 点数)"""
    return SUIT_ORDER.index(card.suit) * 13 + (card.value - Value.TWO)


def cards_to_array(cards: Iterable[Card]) -> np.ndarray:
    """
    将牌列表转换为 52 维计数向量

    Args:
        cards: 牌列表 (允许重复)

    Returns:
        52 维 numpy 数组
    """
    arr = np.zeros(52, dtype=np.float32)
    for card in cards:
        arr[card_index(card)] += 1
    return arr


def standard_deck() -> List[Card]:
    """生成标准 52 张牌，id 从 0 开始递增"""
    cards = []
    for suit in Suit:
        for value in Value:
            cards.append(Card(value, suit, len(cards)))
    return cards


class Deck:
    """
    牌堆

    只通过 draw / append / shuffle 被使用，随机源由外部注入
    """

    def __init__(self, cards: Optional[List[Card]] = None, rng: Optional[random.Random] = None):
        self._cards: List[Card] = list(cards) if cards is not None else standard_deck()
        self._rng = rng or random.Random()

    def draw(self, n: int) -> List[Card]:
        """从牌堆顶部抽取至多 n 张牌"""
        n = min(n, len(self._cards))
        drawn = self._cards[:n]
        del self._cards[:n]
        return drawn

    def append(self, cards: Iterable[Card]):
        self._cards.extend(cards)

    def shuffle(self):
        self._rng.shuffle(self._cards)

    def cards(self) -> List[Card]:
        return list(self._cards)

    def __len__(self) -> int:
        return len(self._cards)
