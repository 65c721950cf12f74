"""
奖励函数

支持两种奖励设计:
- 终局奖励 (sparse)
- 过程奖励 (shaped): 终局奖励 + 盲注分数进度 + 通过盲注奖励
"""
from dataclasses import dataclass
from typing import Optional
from enum import Enum

from core.engine import GameSnapshot
from core.stage import End, StageKind


class RewardType(Enum):
    """奖励类型"""
    SPARSE = "sparse"      # 仅终局奖励
    SHAPED = "shaped"      # 过程奖励


@dataclass
class RewardConfig:
    """奖励配置"""
    reward_type: RewardType = RewardType.SHAPED
    win_reward: float = 1.0
    lose_reward: float = -1.0
    invalid_action_penalty: float = -1.0
    blind_bonus: float = 0.1       # 通过盲注奖励
    progress_scale: float = 0.1    # 分数进度系数

    @classmethod
    def from_dict(cls, d: dict) -> 'RewardConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        if "reward_type" in filtered:
            filtered["reward_type"] = RewardType(filtered["reward_type"])
        return cls(**filtered)


class RewardCalculator:
    """
    奖励计算器

    根据前后两个快照计算一步的奖励
    """

    def __init__(self, config: Optional[RewardConfig] = None):
        self.config = config or RewardConfig()

    def compute(self, state: GameSnapshot, prev_state: Optional[GameSnapshot] = None) -> float:
        """
        计算奖励

        Args:
            state: 当前快照
            prev_state: 执行动作前的快照 (用于 shaped 奖励)

        Returns:
            奖励值
        """
        if self.config.reward_type == RewardType.SPARSE:
            return self._sparse_reward(state)
        elif self.config.reward_type == RewardType.SHAPED:
            return self._shaped_reward(state, prev_state)
        else:
            return 0.0

    def _sparse_reward(self, state: GameSnapshot) -> float:
        """
        稀疏奖励：仅在游戏结束时给予

        Returns:
            胜利: +1, 失败: -1, 其他: 0
        """
        if state.stage.kind != StageKind.END:
            return 0.0
        if state.stage.end == End.WIN:
            return self.config.win_reward
        return self.config.lose_reward

    def _shaped_reward(self, state: GameSnapshot, prev_state: Optional[GameSnapshot]) -> float:
        reward = self._sparse_reward(state)
        if prev_state is None or not prev_state.stage.is_blind():
            return reward

        required = prev_state.required_score
        if state.stage == prev_state.stage:
            # 同一盲注内的分数增长
            gained = state.score - prev_state.score
            if gained > 0:
                reward += self.config.progress_scale * min(gained / required, 1.0)
        elif state.stage.kind == StageKind.POST_BLIND or state.stage.end == End.WIN:
            remaining = max(required - prev_state.score, 0)
            reward += self.config.progress_scale * min(remaining / required, 1.0)
            reward += self.config.blind_bonus

        return reward


def create_reward_calculator(
    reward_type: str = "shaped",
    **kwargs
) -> RewardCalculator:
    """
    工厂函数：创建奖励计算器

    Args:
        reward_type: 奖励类型 ("sparse", "shaped")
        **kwargs: 其他配置参数

    Returns:
        RewardCalculator 实例
    """
    config = RewardConfig(
        reward_type=RewardType(reward_type),
        **kwargs
    )
    return RewardCalculator(config)
