"""
固定宽度的动作空间掩码

布局 (按顺序):
    select_card      available_max
    move_card_left   available_max - 1
    move_card_right  available_max - 1
    play             1
    discard          1
    cash_out         1
    buy_joker        store_consumable_slots_max
    next_round       1
    select_blind     1

总长度只取决于配置，同一配置下索引含义始终不变
"""
from typing import List, Tuple, Dict

import numpy as np

from .config import Config
from .errors import InvalidIndex

# 子区间顺序
SEGMENTS: Tuple[str, ...] = (
    'select_card',
    'move_card_left',
    'move_card_right',
    'play',
    'discard',
    'cash_out',
    'buy_joker',
    'next_round',
    'select_blind',
)


def segment_widths(config: Config) -> Dict[str, int]:
    """各子区间宽度"""
    am = config.available_max
    return {
        'select_card': am,
        'move_card_left': am - 1,
        'move_card_right': am - 1,
        'play': 1,
        'discard': 1,
        'cash_out': 1,
        'buy_joker': config.store_consumable_slots_max,
        'next_round': 1,
        'select_blind': 1,
    }


def segment_offsets(config: Config) -> Dict[str, Tuple[int, int]]:
    """
    各子区间在扁平向量中的 [start, end) 范围

    Example:
        默认配置下 select_card -> (0, 24), select_blind -> (78, 79)
    """
    offsets = {}
    start = 0
    for name, width in segment_widths(config).items():
        offsets[name] = (start, start + width)
        start += width
    return offsets


class ActionSpace:
    """
    动作掩码 (0 = 不可用, 1 = 可用)

    unmask 只会把槽位置 1，从不清零；越界时抛出 InvalidIndex 且不修改向量
    """

    def __init__(self, config: Config):
        self.config = config
        widths = segment_widths(config)
        self.select_card = np.zeros(widths['select_card'], dtype=np.int8)
        self.move_card_left = np.zeros(widths['move_card_left'], dtype=np.int8)
        self.move_card_right = np.zeros(widths['move_card_right'], dtype=np.int8)
        self.play = np.zeros(widths['play'], dtype=np.int8)
        self.discard = np.zeros(widths['discard'], dtype=np.int8)
        self.cash_out = np.zeros(widths['cash_out'], dtype=np.int8)
        self.buy_joker = np.zeros(widths['buy_joker'], dtype=np.int8)
        self.next_round = np.zeros(widths['next_round'], dtype=np.int8)
        self.select_blind = np.zeros(widths['select_blind'], dtype=np.int8)

    @classmethod
    def from_config(cls, config: Config) -> 'ActionSpace':
        return cls(config)

    @staticmethod
    def _unmask(arr: np.ndarray, i: int):
        if not 0 <= i < len(arr):
            raise InvalidIndex(i, len(arr))
        arr[i] = 1

    def unmask_select_card(self, i: int):
        self._unmask(self.select_card, i)

    def unmask_move_card_left(self, i: int):
        self._unmask(self.move_card_left, i)

    def unmask_move_card_right(self, i: int):
        self._unmask(self.move_card_right, i)

    def unmask_play(self):
        self.play[0] = 1

    def unmask_discard(self):
        self.discard[0] = 1

    def unmask_cash_out(self):
        self.cash_out[0] = 1

    def unmask_buy_joker(self, i: int):
        self._unmask(self.buy_joker, i)

    def unmask_next_round(self):
        self.next_round[0] = 1

    def unmask_select_blind(self):
        self.select_blind[0] = 1

    def segments(self) -> List[np.ndarray]:
        return [getattr(self, name) for name in SEGMENTS]

    def size(self) -> int:
        return sum(len(seg) for seg in self.segments())

    def to_array(self) -> np.ndarray:
        """按布局顺序拼接 (左移在前，右移在后)"""
        return np.concatenate(self.segments()).astype(np.int8)

    def to_list(self) -> List[int]:
        return self.to_array().tolist()

    def legal_indices(self) -> np.ndarray:
        return np.flatnonzero(self.to_array())

    def __len__(self) -> int:
        return self.size()
