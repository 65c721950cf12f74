"""
Environment Layer - Gymnasium 兼容环境

Modules:
    balatro_env: 主环境类
    observation: 观测空间构建
    reward: 奖励函数
    wrappers: 环境包装器
"""
from .balatro_env import (
    BalatroEnv,
    make_env,
)

from .observation import (
    Observation,
    ObservationBuilder,
)

from .reward import (
    RewardType,
    RewardConfig,
    RewardCalculator,
    create_reward_calculator,
)

from .wrappers import (
    FlattenObservationWrapper,
    LegalActionMaskWrapper,
    RewardScaleWrapper,
    RecordEpisodeStatistics,
    wrap_env,
)

__all__ = [
    # env
    "BalatroEnv",
    "make_env",
    # observation
    "Observation",
    "ObservationBuilder",
    # reward
    "RewardType",
    "RewardConfig",
    "RewardCalculator",
    "create_reward_calculator",
    # wrappers
    "FlattenObservationWrapper",
    "LegalActionMaskWrapper",
    "RewardScaleWrapper",
    "RecordEpisodeStatistics",
    "wrap_env",
]
