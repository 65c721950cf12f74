"""
环境包装器

提供常用的环境增强功能
"""
from typing import Dict, Tuple
import numpy as np

import gymnasium as gym
from gymnasium import Wrapper


class FlattenObservationWrapper(Wrapper):
    """
    将字典观测展平为单一向量

    用于不支持字典观测的算法
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)

        flat_dim = sum(
            int(np.prod(space.shape)) for space in env.observation_space.spaces.values()
        )
        self.observation_space = gym.spaces.Box(
            low=-np.inf,
            high=np.inf,
            shape=(flat_dim,),
            dtype=np.float32,
        )

    def observation(self, obs: Dict[str, np.ndarray]) -> np.ndarray:
        """展平观测"""
        return np.concatenate([
            np.asarray(v, dtype=np.float32).flatten() for v in obs.values()
        ])

    def reset(self, **kwargs) -> Tuple[np.ndarray, Dict]:
        obs, info = self.env.reset(**kwargs)
        return self.observation(obs), info

    def step(self, action) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        obs, reward, terminated, truncated, info = self.env.step(action)
        return self.observation(obs), reward, terminated, truncated, info


class LegalActionMaskWrapper(Wrapper):
    """
    把动作掩码放进观测字典的 "action_mask" 键

    用于只读取观测的 action masking 算法
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        spaces = dict(env.observation_space.spaces)
        spaces["action_mask"] = gym.spaces.Box(
            0, 1, shape=(env.action_space.n,), dtype=np.int8
        )
        self.observation_space = gym.spaces.Dict(spaces)

    def reset(self, **kwargs) -> Tuple[Dict, Dict]:
        obs, info = self.env.reset(**kwargs)
        return self._with_mask(obs, info), info

    def step(self, action) -> Tuple[Dict, float, bool, bool, Dict]:
        obs, reward, terminated, truncated, info = self.env.step(action)
        return self._with_mask(obs, info), reward, terminated, truncated, info

    @staticmethod
    def _with_mask(obs: Dict, info: Dict) -> Dict:
        obs = dict(obs)
        obs["action_mask"] = np.asarray(info["action_mask"], dtype=np.int8)
        return obs


class RewardScaleWrapper(Wrapper):
    """
    奖励缩放包装器
    """

    def __init__(self, env: gym.Env, scale: float = 1.0):
        super().__init__(env)
        self.scale = scale

    def step(self, action) -> Tuple[Dict, float, bool, bool, Dict]:
        obs, reward, terminated, truncated, info = self.env.step(action)
        return obs, reward * self.scale, terminated, truncated, info


class RecordEpisodeStatistics(Wrapper):
    """
    记录回合统计信息
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        self._episode_reward = 0.0
        self._episode_length = 0
        self._invalid_actions = 0

    def reset(self, **kwargs) -> Tuple[Dict, Dict]:
        obs, info = self.env.reset(**kwargs)
        self._episode_reward = 0.0
        self._episode_length = 0
        self._invalid_actions = 0
        return obs, info

    def step(self, action) -> Tuple[Dict, float, bool, bool, Dict]:
        obs, reward, terminated, truncated, info = self.env.step(action)

        self._episode_reward += reward
        self._episode_length += 1
        if "error" in info:
            self._invalid_actions += 1

        if terminated or truncated:
            info["episode"] = {
                "r": self._episode_reward,
                "l": self._episode_length,
                "invalid": self._invalid_actions,
                "result": info.get("result"),
                "ante": info.get("ante"),
            }

        return obs, reward, terminated, truncated, info


def wrap_env(
    env: gym.Env,
    flatten_obs: bool = False,
    action_mask: bool = False,
    record_stats: bool = True,
    reward_scale: float = 1.0,
) -> gym.Env:
    """
    应用常用包装器组合

    Args:
        env: 基础环境
        flatten_obs: 是否展平观测
        action_mask: 是否把动作掩码放进观测
        record_stats: 是否记录统计
        reward_scale: 奖励缩放

    Returns:
        包装后的环境
    """
    if record_stats:
        env = RecordEpisodeStatistics(env)

    if reward_scale != 1.0:
        env = RewardScaleWrapper(env, scale=reward_scale)

    if action_mask:
        env = LegalActionMaskWrapper(env)

    if flatten_obs:
        env = FlattenObservationWrapper(env)

    return env
