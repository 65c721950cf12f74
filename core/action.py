"""
动作定义

所有玩家意图都表示为带类型标签的不可变 Action
生成器构造，Game.handle_action 消费，成功后进入动作历史
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import Optional

from .cards import Card
from .hand import SelectHand
from .stage import Blind
from .joker import Jokers


class ActionType(IntEnum):
    """动作类型"""
    SELECT_CARD = 0
    MOVE_CARD = 1
    PLAY = 2
    DISCARD = 3
    CASH_OUT = 4
    BUY_JOKER = 5
    NEXT_ROUND = 6
    SELECT_BLIND = 7


class MoveDirection(IntEnum):
    """移牌方向"""
    LEFT = 0
    RIGHT = 1


@dataclass(frozen=True)
class Action:
    """
    不可变动作表示

    Attributes:
        action_type: 动作类型
        card: 选牌 / 移牌的目标牌
        direction: 移牌方向
        hand: 出牌 / 弃牌的显式牌组 (None 表示使用当前选中的牌)
        blind: 选择的盲注
        joker: 购买的小丑牌
        reward: 结算时的奖励金额
    """
    action_type: ActionType
    card: Optional[Card] = None
    direction: Optional[MoveDirection] = None
    hand: Optional[SelectHand] = None
    blind: Optional[Blind] = None
    joker: Optional[Jokers] = None
    reward: int = 0

    @classmethod
    def select_card(cls, card: Card) -> 'Action':
        return cls(ActionType.SELECT_CARD, card=card)

    @classmethod
    def move_card(cls, direction: MoveDirection, card: Card) -> 'Action':
        return cls(ActionType.MOVE_CARD, card=card, direction=direction)

    @classmethod
    def play(cls, hand: Optional[SelectHand] = None) -> 'Action':
        return cls(ActionType.PLAY, hand=hand)

    @classmethod
    def discard(cls, hand: Optional[SelectHand] = None) -> 'Action':
        return cls(ActionType.DISCARD, hand=hand)

    @classmethod
    def cash_out(cls, reward: int) -> 'Action':
        return cls(ActionType.CASH_OUT, reward=reward)

    @classmethod
    def buy_joker(cls, joker: Jokers) -> 'Action':
        return cls(ActionType.BUY_JOKER, joker=joker)

    @classmethod
    def next_round(cls) -> 'Action':
        return cls(ActionType.NEXT_ROUND)

    @classmethod
    def select_blind(cls, blind: Blind) -> 'Action':
        return cls(ActionType.SELECT_BLIND, blind=blind)

    @property
    def is_blind_scoped(self) -> bool:
        """是否只能在盲注阶段执行"""
        return self.action_type in (
            ActionType.SELECT_CARD, ActionType.MOVE_CARD, ActionType.PLAY, ActionType.DISCARD,
        )

    def __str__(self) -> str:
        t = self.action_type
        if t == ActionType.SELECT_CARD:
            return f"SelectCard({self.card})"
        if t == ActionType.MOVE_CARD:
            return f"MoveCard({self.direction.name.lower()}, {self.card})"
        if t in (ActionType.PLAY, ActionType.DISCARD):
            name = "Play" if t == ActionType.PLAY else "Discard"
            if self.hand is None:
                return f"{name}(selected)"
            return f"{name}({' '.join(str(c) for c in self.hand)})"
        if t == ActionType.CASH_OUT:
            return f"CashOut({self.reward})"
        if t == ActionType.BUY_JOKER:
            return f"BuyJoker({self.joker.display_name})"
        if t == ActionType.NEXT_ROUND:
            return "NextRound"
        return f"SelectBlind({self.blind.value})"
