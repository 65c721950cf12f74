"""
评估器

让智能体通过环境完整地玩若干局，统计胜率与进度
"""
from typing import Dict, List, Optional, Callable, Any
from dataclasses import dataclass, field
from collections import Counter
import logging

import numpy as np

from core.config import Config
from core.space import segment_offsets

logger = logging.getLogger(__name__)


@dataclass
class EvalResult:
    """评估结果"""
    win_rate: float
    avg_reward: float
    avg_length: float
    games_played: int
    avg_ante: float = 0.0
    max_ante: int = 0
    invalid_rate: float = 0.0
    extra_stats: Dict[str, float] = field(default_factory=dict)

    def __repr__(self) -> str:
        return (
            f"EvalResult(win_rate={self.win_rate:.2%}, "
            f"avg_reward={self.avg_reward:.2f}, "
            f"avg_ante={self.avg_ante:.2f}, "
            f"games={self.games_played})"
        )


class Agent:
    """智能体基类"""

    def __init__(self, name: str = "agent"):
        self.name = name

    def act(self, obs: Dict[str, Any], legal_actions: List[int]) -> int:
        """从合法动作索引中选择一个"""
        raise NotImplementedError

    def reset(self):
        """重置状态"""
        pass


class RandomAgent(Agent):
    """随机智能体"""

    def __init__(self, name: str = "random", seed: Optional[int] = None):
        super().__init__(name)
        self._rng = np.random.default_rng(seed)

    def act(self, obs: Dict[str, Any], legal_actions: List[int]) -> int:
        if not legal_actions:
            return 0
        return int(legal_actions[self._rng.integers(len(legal_actions))])


class RuleBasedAgent(Agent):
    """
    规则智能体

    盲注内: 优先选中点数出现次数多、点数大的牌，凑满后出牌
    其余阶段: 选盲注 / 结算 / 买第一张买得起的小丑牌 / 下一回合
    """

    def __init__(self, config: Optional[Config] = None, name: str = "rule"):
        super().__init__(name)
        self.config = config or Config()
        self._offsets = segment_offsets(self.config)

    def _first_in(self, segment: str, legal: set) -> Optional[int]:
        start, end = self._offsets[segment]
        for i in range(start, end):
            if i in legal:
                return i
        return None

    def act(self, obs: Dict[str, Any], legal_actions: List[int]) -> int:
        if not legal_actions:
            return 0
        legal = set(int(a) for a in legal_actions)

        for segment in ("select_blind", "cash_out", "buy_joker", "next_round"):
            index = self._first_in(segment, legal)
            if index is not None:
                return index

        available = np.asarray(obs["available"])
        selected = np.asarray(obs["selected"])
        present = available.sum(axis=1) > 0
        n_present = int(present.sum())
        n_selected = int(selected[present].sum())
        target = min(self.config.selected_max, n_present)

        play = self._offsets["play"][0]
        if n_selected >= target and play in legal:
            return play

        # 按 (点数出现次数, 点数) 排序未选中的牌
        values = {
            i: int(np.argmax(available[i])) % 13
            for i in range(len(available)) if present[i]
        }
        counts = Counter(values.values())
        start = self._offsets["select_card"][0]
        candidates = [
            i for i in values
            if not selected[i] and (start + i) in legal
        ]
        if candidates:
            best = max(candidates, key=lambda i: (counts[values[i]], values[i]))
            return start + best

        if play in legal:
            return play
        return int(legal_actions[0])


class Evaluator:
    """
    评估器

    评估智能体在环境中的表现
    """

    def __init__(self, env_fn: Callable):
        self.env_fn = env_fn

    def evaluate(
        self,
        agent: Agent,
        n_games: int = 100,
        seed: Optional[int] = None,
        verbose: bool = False,
    ) -> EvalResult:
        """
        评估智能体

        Args:
            agent: 待评估智能体
            n_games: 游戏数量
            seed: 第 i 局使用 seed + i (None 为不固定)
            verbose: 是否输出详情

        Returns:
            评估结果
        """
        env = self.env_fn()

        wins = 0
        total_reward = 0.0
        total_length = 0
        total_invalid = 0
        antes = []

        for game_idx in range(n_games):
            game_seed = seed + game_idx if seed is not None else None
            obs, info = env.reset(seed=game_seed)
            agent.reset()
            done = False
            episode_reward = 0.0
            episode_length = 0

            while not done:
                legal_actions = np.flatnonzero(info["action_mask"]).tolist()
                action = agent.act(obs, legal_actions)
                obs, reward, terminated, truncated, info = env.step(action)
                done = terminated or truncated

                if "error" in info:
                    total_invalid += 1
                    logger.debug(f"Game {game_idx}: rejected action {action}: {info['error']}")
                episode_reward += reward
                episode_length += 1

            if info.get("result") == "win":
                wins += 1
            antes.append(info["ante"])
            total_reward += episode_reward
            total_length += episode_length

            if verbose and (game_idx + 1) % 10 == 0:
                logger.info(f"Game {game_idx + 1}/{n_games}, Win rate: {wins/(game_idx+1):.2%}")

        env.close()

        return EvalResult(
            win_rate=wins / n_games if n_games > 0 else 0.0,
            avg_reward=total_reward / n_games if n_games > 0 else 0.0,
            avg_length=total_length / n_games if n_games > 0 else 0.0,
            games_played=n_games,
            avg_ante=float(np.mean(antes)) if antes else 0.0,
            max_ante=max(antes) if antes else 0,
            invalid_rate=total_invalid / total_length if total_length > 0 else 0.0,
        )

    def compare(
        self,
        agent1: Agent,
        agent2: Agent,
        n_games: int = 100,
        seed: int = 0,
    ) -> Dict[str, float]:
        """
        在相同种子的牌局上对比两个智能体

        Returns:
            对比结果
        """
        result1 = self.evaluate(agent1, n_games=n_games, seed=seed)
        result2 = self.evaluate(agent2, n_games=n_games, seed=seed)

        return {
            "agent1_win_rate": result1.win_rate,
            "agent2_win_rate": result2.win_rate,
            "agent1_avg_ante": result1.avg_ante,
            "agent2_avg_ante": result2.avg_ante,
        }
