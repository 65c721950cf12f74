"""
Balatro Gymnasium 环境

遵循标准 Gymnasium API，动作为固定宽度动作空间中的索引
"""
from typing import Dict, Any, Tuple, Optional, List, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from core.action import Action
from core.config import Config
from core.engine import GameEngine, GameSnapshot
from core.errors import GameError, ActionSpaceError
from core.space import ActionSpace

from .observation import ObservationBuilder
from .reward import RewardCalculator, RewardConfig, RewardType


class BalatroEnv(gym.Env):
    """
    Balatro Gymnasium 环境

    API:
    - reset() -> observation, info
    - step(action) -> observation, reward, terminated, truncated, info

    info["action_mask"] 给出当前合法的动作索引；
    非法动作不会改变状态，返回惩罚奖励并在 info["error"] 中说明原因
    """

    metadata = {
        "render_modes": ["human", "ansi"],
        "name": "Balatro-v0",
    }

    def __init__(
        self,
        config: Optional[Config] = None,
        render_mode: Optional[str] = None,
        reward_type: str = "shaped",
        reward_config: Optional[RewardConfig] = None,
        max_steps: Optional[int] = None,
        seed: Optional[int] = None,
    ):
        """
        Args:
            config: 游戏配置
            render_mode: 渲染模式 ("human", "ansi", None)
            reward_type: 奖励类型 ("sparse", "shaped")，reward_config 优先
            max_steps: 每局最大步数 (超过后 truncated)
            seed: 随机种子
        """
        super().__init__()

        self.config = config or Config()
        self.render_mode = render_mode
        self.max_steps = max_steps
        self._seed = seed

        self._obs_builder = ObservationBuilder(self.config)
        self._reward_calculator = RewardCalculator(
            reward_config or RewardConfig(reward_type=RewardType(reward_type))
        )

        self._engine: Optional[GameEngine] = None
        self._prev_state: Optional[GameSnapshot] = None
        self._step_count = 0

        self._define_spaces()

    def _define_spaces(self):
        """定义观测和动作空间"""
        size = ActionSpace.from_config(self.config).size()
        self.action_space = spaces.Discrete(size)

        shapes = self._obs_builder.shapes()
        self.observation_space = spaces.Dict({
            "available": spaces.Box(0, 1, shape=shapes["available"], dtype=np.float32),
            "selected": spaces.Box(0, 1, shape=shapes["selected"], dtype=np.float32),
            "stage": spaces.Box(0, 1, shape=shapes["stage"], dtype=np.float32),
            "scalars": spaces.Box(0, 1, shape=shapes["scalars"], dtype=np.float32),
            "jokers": spaces.Box(0, np.inf, shape=shapes["jokers"], dtype=np.float32),
            "shop": spaces.Box(0, 1, shape=shapes["shop"], dtype=np.float32),
            "hand_levels": spaces.Box(0, np.inf, shape=shapes["hand_levels"], dtype=np.float32),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        重置环境

        Args:
            seed: 随机种子
            options: 额外选项

        Returns:
            (observation, info) 元组
        """
        super().reset(seed=seed)

        game_seed = seed if seed is not None else self._seed
        self._engine = GameEngine(self.config, seed=game_seed)
        self._prev_state = None
        self._step_count = 0

        obs = self._build_observation()
        info = self._build_info()

        if self.render_mode == "human":
            self.render()

        return obs, info

    def step(
        self,
        action: Union[int, Action],
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        执行动作

        Args:
            action: 动作索引或 Action 对象

        Returns:
            (observation, reward, terminated, truncated, info) 元组
        """
        if self._engine is None:
            raise RuntimeError("Environment not reset. Call reset() first.")

        self._prev_state = self._engine.snapshot()
        self._step_count += 1
        truncated = self.max_steps is not None and self._step_count >= self.max_steps

        error = self._apply(action)
        if error is not None:
            # 非法动作：给予惩罚并保持状态
            obs = self._build_observation()
            info = self._build_info()
            info["error"] = error
            return obs, self._reward_calculator.config.invalid_action_penalty, False, truncated, info

        state = self._engine.snapshot()
        obs = self._build_observation()
        reward = self._reward_calculator.compute(state, self._prev_state)
        terminated = self._engine.is_over()
        info = self._build_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _apply(self, action: Union[int, Action]) -> Optional[str]:
        """执行动作，失败时返回错误描述"""
        if isinstance(action, Action):
            try:
                self._engine.handle_action(action)
            except GameError as e:
                return f"{type(e).__name__}: {e}"
            return None

        if not isinstance(action, (int, np.integer)):
            raise ValueError(f"Invalid action type: {type(action)}")

        index = int(action)
        mask = self._engine.gen_action_space()
        if not 0 <= index < len(mask):
            return f"InvalidIndex: {index} out of range 0-{len(mask) - 1}"
        if not mask[index]:
            return f"Action index {index} is masked"
        try:
            self._engine.handle_action_index(index)
        except (GameError, ActionSpaceError) as e:
            return f"{type(e).__name__}: {e}"
        return None

    def _build_observation(self) -> Dict[str, np.ndarray]:
        return self._obs_builder.build(self._engine.game).to_dict()

    def _build_info(self) -> Dict[str, Any]:
        """构建 info 字典"""
        state = self._engine.snapshot()
        mask = self._engine.gen_action_space()

        info = {
            "stage": str(state.stage),
            "ante": int(state.ante),
            "round": state.round,
            "score": state.score,
            "required_score": state.required_score,
            "money": state.money,
            "step_count": self._step_count,
            "action_mask": mask,
            "legal_action_indices": np.flatnonzero(mask),
        }

        result = self._engine.result()
        if result is not None:
            info["result"] = result.value

        return info

    def render(self) -> Optional[str]:
        """渲染环境"""
        if self.render_mode == "ansi" or self.render_mode == "human":
            return self._render_text()
        return None

    def _render_text(self) -> str:
        lines = ["=" * 50, str(self._engine.game), "=" * 50]
        output = "\n".join(lines)
        if self.render_mode == "human":
            print(output)
        return output

    def close(self):
        pass

    @property
    def engine(self) -> Optional[GameEngine]:
        """获取当前引擎 (用于调试)"""
        return self._engine

    def get_legal_actions(self) -> List[int]:
        """获取当前合法动作索引"""
        if self._engine is None:
            return []
        return np.flatnonzero(self._engine.gen_action_space()).tolist()

    def sample_action(self) -> int:
        """随机采样一个合法动作"""
        legal_actions = self.get_legal_actions()
        if not legal_actions:
            return 0
        return int(self.np_random.choice(legal_actions))


def make_env(
    env_id: str = "Balatro-v0",
    **kwargs
) -> BalatroEnv:
    """
    工厂函数：创建环境

    Args:
        env_id: 环境 ID
        **kwargs: 环境参数

    Returns:
        BalatroEnv 实例
    """
    return BalatroEnv(**kwargs)
