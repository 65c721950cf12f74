"""
效果注册表

小丑牌的效果以数据形式保存 (触发点 + 来源小丑牌)，计分时按小丑牌类型分派执行
注册表只能通过完整的持有列表重建，顺序即获得顺序
"""
from enum import Enum
from dataclasses import dataclass
from typing import Dict, List, Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from .game import Game
    from .hand import MadeHand
    from .joker import Jokers


class EffectTrigger(Enum):
    """效果触发点"""
    ON_SCORE = "on_score"


@dataclass(frozen=True)
class Effect:
    """
    单个效果钩子

    Attributes:
        trigger: 触发点
        joker: 来源小丑牌
    """
    trigger: EffectTrigger
    joker: 'Jokers'

    def apply(self, game: 'Game', hand: 'MadeHand'):
        self.joker.apply(game, hand)


class EffectRegistry:
    """按触发点分组的有序效果列表"""

    def __init__(self):
        self._effects: Dict[EffectTrigger, List[Effect]] = {t: [] for t in EffectTrigger}

    @property
    def on_score(self) -> List[Effect]:
        return list(self._effects[EffectTrigger.ON_SCORE])

    def effects(self, trigger: EffectTrigger) -> List[Effect]:
        return list(self._effects[trigger])

    def register_jokers(self, jokers: Iterable['Jokers'], game: 'Game'):
        """
        从完整的小丑牌持有列表重建注册表

        Args:
            jokers: 按获得顺序排列的小丑牌
            game: 当前游戏 (传给 effects 用于推导效果)
        """
        self.clear()
        for joker in jokers:
            for effect in joker.effects(game):
                self._effects[effect.trigger].append(effect)

    def clear(self):
        for effects in self._effects.values():
            effects.clear()

    def __len__(self) -> int:
        return sum(len(v) for v in self._effects.values())
