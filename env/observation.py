"""
观察空间编码

将游戏状态转换为定长的 numpy 特征
"""
from dataclasses import dataclass
from typing import Dict

import numpy as np

from core.cards import cards_to_array
from core.config import Config
from core.game import Game
from core.hand import HandRank
from core.joker import Jokers
from core.stage import Blind, StageKind

# 阶段 one-hot 的顺序 (盲注阶段按等级展开)
STAGE_SLOTS = (
    (StageKind.PRE_BLIND, None),
    (StageKind.BLIND, Blind.SMALL),
    (StageKind.BLIND, Blind.BIG),
    (StageKind.BLIND, Blind.BOSS),
    (StageKind.POST_BLIND, None),
    (StageKind.SHOP, None),
    (StageKind.END, None),
)

NUM_JOKERS = len(Jokers)
NUM_HAND_RANKS = len(HandRank)
NUM_SCALARS = 8


@dataclass
class Observation:
    """
    结构化观测

    Attributes:
        available: 按位置排列的可用牌 (available_max, 52)
        selected: 各位置是否被选中 (available_max,)
        stage: 阶段 one-hot (7,)
        scalars: 归一化的数值特征 (8,)
            [ante, round, score 进度, plays, discards, money, reward, 牌堆剩余]
        jokers: 持有的小丑牌计数 (NUM_JOKERS,)
        shop: 商店各槽位的小丑牌 (store_slots, NUM_JOKERS)
        hand_levels: 各牌型等级 (13,)
    """
    available: np.ndarray
    selected: np.ndarray
    stage: np.ndarray
    scalars: np.ndarray
    jokers: np.ndarray
    shop: np.ndarray
    hand_levels: np.ndarray

    def to_dict(self) -> Dict[str, np.ndarray]:
        return {
            "available": self.available,
            "selected": self.selected,
            "stage": self.stage,
            "scalars": self.scalars,
            "jokers": self.jokers,
            "shop": self.shop,
            "hand_levels": self.hand_levels,
        }

    def to_flat_array(self) -> np.ndarray:
        """展平为单一向量"""
        return np.concatenate([v.flatten() for v in self.to_dict().values()]).astype(np.float32)


class ObservationBuilder:
    """
    观测构建器

    负责将 Game 转换为 Observation，形状只取决于配置
    """

    def __init__(self, config: Config):
        self.config = config

    def shapes(self) -> Dict[str, tuple]:
        am = self.config.available_max
        return {
            "available": (am, 52),
            "selected": (am,),
            "stage": (len(STAGE_SLOTS),),
            "scalars": (NUM_SCALARS,),
            "jokers": (NUM_JOKERS,),
            "shop": (self.config.store_consumable_slots_max, NUM_JOKERS),
            "hand_levels": (NUM_HAND_RANKS,),
        }

    def build(self, game: Game) -> Observation:
        return Observation(
            available=self._encode_available(game),
            selected=self._encode_selected(game),
            stage=self._encode_stage(game),
            scalars=self._encode_scalars(game),
            jokers=self._encode_jokers(game),
            shop=self._encode_shop(game),
            hand_levels=self._encode_hand_levels(game),
        )

    def _encode_available(self, game: Game) -> np.ndarray:
        result = np.zeros((self.config.available_max, 52), dtype=np.float32)
        for i, card in enumerate(game.available[:self.config.available_max]):
            result[i] = cards_to_array([card])
        return result

    def _encode_selected(self, game: Game) -> np.ndarray:
        result = np.zeros(self.config.available_max, dtype=np.float32)
        for i, card in enumerate(game.available[:self.config.available_max]):
            if card in game.selected:
                result[i] = 1
        return result

    def _encode_stage(self, game: Game) -> np.ndarray:
        result = np.zeros(len(STAGE_SLOTS), dtype=np.float32)
        result[STAGE_SLOTS.index((game.stage.kind, game.stage.blind))] = 1
        return result

    def _encode_scalars(self, game: Game) -> np.ndarray:
        """
        数值特征

        分数进度只在盲注阶段有意义，其余阶段为 0
        """
        progress = 0.0
        if game.stage.is_blind():
            progress = min(game.score / game.required_score(), 1.0)
        cfg = self.config
        return np.array([
            game.ante / 8.0,
            min(game.round / 24.0, 1.0),
            progress,
            game.plays / max(cfg.plays, 1),
            game.discards / max(cfg.discards, 1),
            min(game.money / 50.0, 1.0),
            min(game.reward / 20.0, 1.0),
            len(game.deck) / 52.0,
        ], dtype=np.float32)

    def _encode_jokers(self, game: Game) -> np.ndarray:
        result = np.zeros(NUM_JOKERS, dtype=np.float32)
        members = list(Jokers)
        for joker in game.jokers:
            result[members.index(joker)] += 1
        return result

    def _encode_shop(self, game: Game) -> np.ndarray:
        result = np.zeros((self.config.store_consumable_slots_max, NUM_JOKERS), dtype=np.float32)
        members = list(Jokers)
        for i, joker in enumerate(game.shop.jokers[:self.config.store_consumable_slots_max]):
            result[i, members.index(joker)] = 1
        return result

    def _encode_hand_levels(self, game: Game) -> np.ndarray:
        return np.array(
            [game.planetarium.level(rank).level for rank in HandRank],
            dtype=np.float32,
        )
