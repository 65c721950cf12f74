"""
商店

每次进入商店时按稀有度权重刷新小丑牌库存
随机源由 Game 注入，与牌堆共用
"""
from typing import List, Optional, Iterator
import random

from .joker import Jokers, Rarity

# 稀有度权重
RARITY_WEIGHTS = {
    Rarity.COMMON: 0.70,
    Rarity.UNCOMMON: 0.25,
    Rarity.RARE: 0.05,
}


class Shop:
    """
    商店库存

    Attributes:
        jokers: 当前可购买的小丑牌 (按槽位顺序)
        slots: 小丑牌槽位数
    """

    def __init__(self, slots: int = 4, jokers: Optional[List[Jokers]] = None):
        self.slots = slots
        self.jokers: List[Jokers] = list(jokers) if jokers is not None else []

    def refresh(self, rng: random.Random):
        """清空并重新填充全部槽位 (同一次刷新内不重复)"""
        self.jokers = []
        for _ in range(self.slots):
            rarity = self._choose_rarity(rng)
            candidates = [j for j in Jokers.by_rarity(rarity) if j not in self.jokers]
            if not candidates:
                candidates = [j for j in Jokers if j not in self.jokers]
            if not candidates:
                break
            self.jokers.append(rng.choice(candidates))

    @staticmethod
    def _choose_rarity(rng: random.Random) -> Rarity:
        # 没有对应小丑牌的稀有度不参与抽取
        rarities = [r for r in RARITY_WEIGHTS if Jokers.by_rarity(r)]
        weights = [RARITY_WEIGHTS[r] for r in rarities]
        return rng.choices(rarities, weights=weights, k=1)[0]

    def joker_from_index(self, i: int) -> Optional[Jokers]:
        if 0 <= i < len(self.jokers):
            return self.jokers[i]
        return None

    def has_joker(self, joker: Jokers) -> bool:
        return joker in self.jokers

    def buy_joker(self, joker: Jokers) -> Jokers:
        """从库存中移除一张小丑牌 (调用方已检查存在)"""
        self.jokers.remove(joker)
        return joker

    def gen_moves_buy_joker(self, money: int) -> Optional[Iterator[Jokers]]:
        """
        生成买得起的小丑牌

        Returns:
            没有可购买的小丑牌时返回 None
        """
        affordable = [j for j in self.jokers if j.cost <= money]
        if not affordable:
            return None
        return iter(affordable)

    def __len__(self) -> int:
        return len(self.jokers)
