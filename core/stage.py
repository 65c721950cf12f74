"""
游戏阶段定义

阶段转移图:
    PreBlind -> Blind(Small|Big|Boss) -> PostBlind -> Shop -> PreBlind
    Blind(Boss) 通过且无下一 Ante -> End(Win)
    Blind 失败 (无剩余出牌次数) -> End(Lose)
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Blind(Enum):
    """盲注等级"""
    SMALL = "small"
    BIG = "big"
    BOSS = "boss"

    def reward(self) -> int:
        """通过盲注的基础奖励"""
        return BLIND_REWARD[self]

    def next(self) -> 'Blind':
        """严格后继 (Boss 之后回到 Small)"""
        if self == Blind.SMALL:
            return Blind.BIG
        if self == Blind.BIG:
            return Blind.BOSS
        return Blind.SMALL


BLIND_REWARD = {
    Blind.SMALL: 3,
    Blind.BIG: 4,
    Blind.BOSS: 5,
}


class End(Enum):
    """终局结果"""
    WIN = "win"
    LOSE = "lose"


class StageKind(Enum):
    """阶段类型"""
    PRE_BLIND = "pre_blind"
    BLIND = "blind"
    POST_BLIND = "post_blind"
    SHOP = "shop"
    END = "end"


@dataclass(frozen=True)
class Stage:
    """
    当前阶段

    Attributes:
        kind: 阶段类型
        blind: 盲注等级 (仅 BLIND 阶段)
        end: 终局结果 (仅 END 阶段)
    """
    kind: StageKind
    blind: Optional[Blind] = None
    end: Optional[End] = None

    @classmethod
    def pre_blind(cls) -> 'Stage':
        return cls(StageKind.PRE_BLIND)

    @classmethod
    def in_blind(cls, blind: Blind) -> 'Stage':
        return cls(StageKind.BLIND, blind=blind)

    @classmethod
    def post_blind(cls) -> 'Stage':
        return cls(StageKind.POST_BLIND)

    @classmethod
    def shop(cls) -> 'Stage':
        return cls(StageKind.SHOP)

    @classmethod
    def ended(cls, end: End) -> 'Stage':
        return cls(StageKind.END, end=end)

    def is_blind(self) -> bool:
        return self.kind == StageKind.BLIND

    @property
    def is_end(self) -> bool:
        return self.kind == StageKind.END

    def __str__(self) -> str:
        if self.kind == StageKind.BLIND:
            return f"blind({self.blind.value})"
        if self.kind == StageKind.END:
            return f"end({self.end.value})"
        return self.kind.value
