"""
游戏配置

定义牌桌规模、资源上限和经济参数
"""
from dataclasses import dataclass

from .ante import Ante


@dataclass
class Config:
    """
    游戏配置

    Attributes:
        selected_max: 同时选中牌的上限
        available_max: 可用牌池上限 (决定动作空间宽度)
        joker_slots: 小丑牌持有上限
        store_consumable_slots_max: 商店可购买小丑牌槽位数 (决定动作空间宽度)
        hand_size: 每次发牌数
        plays: 每个盲注的出牌次数
        discards: 每个盲注的弃牌次数
    """
    # 动作空间相关
    selected_max: int = 5
    available_max: int = 24
    joker_slots: int = 5
    store_consumable_slots_max: int = 4

    # 牌桌
    hand_size: int = 8
    plays: int = 4
    discards: int = 4

    # 经济
    money_start: int = 0
    reward_base: int = 0
    money_per_hand: int = 1
    interest_rate: float = 0.2
    interest_max: int = 5

    # 计分基准
    base_chips: int = 0
    base_mult: int = 0
    base_score: int = 0

    # Ante 范围
    ante_start: Ante = Ante.ONE
    ante_end: Ante = Ante.EIGHT

    def __post_init__(self):
        self.ante_start = Ante(self.ante_start)
        self.ante_end = Ante(self.ante_end)
        if self.available_max < 2:
            raise ValueError(f"available_max must be >= 2, got {self.available_max}")
        if self.store_consumable_slots_max < 0:
            raise ValueError(
                f"store_consumable_slots_max must be >= 0, got {self.store_consumable_slots_max}"
            )
        if not 0 < self.selected_max:
            raise ValueError(f"selected_max must be > 0, got {self.selected_max}")
        if self.hand_size > self.available_max:
            raise ValueError(
                f"hand_size ({self.hand_size}) exceeds available_max ({self.available_max})"
            )
        if self.ante_start > self.ante_end:
            raise ValueError("ante_start must not be after ante_end")

    @classmethod
    def from_dict(cls, d: dict) -> 'Config':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)
