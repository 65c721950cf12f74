"""
引擎门面

驱动层 (环境 / 评估 / 测试) 通过 GameEngine 访问游戏:
- 生成合法动作 / 动作掩码
- 按动作或索引执行
- 查询终局与可观测状态

整个 Game 实例由一把可重入锁保护
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple
import threading
import random

import numpy as np

from .action import Action
from .ante import Ante
from .cards import Card
from .config import Config
from .game import Game
from .joker import Jokers
from .planet import Planets
from .stage import Stage, End


@dataclass(frozen=True)
class GameSnapshot:
    """某一时刻的可观测状态 (不可变副本)"""
    stage: Stage
    ante: Ante
    round: int
    score: int
    required_score: Optional[int]
    plays: int
    discards: int
    money: int
    reward: int
    available: Tuple[Card, ...]
    selected: Tuple[Card, ...]
    jokers: Tuple[Jokers, ...]
    shop: Tuple[Jokers, ...]
    deck_size: int
    history: Tuple[Action, ...]


class GameEngine:
    """
    线程安全的游戏门面

    Example:
        engine = GameEngine(seed=0)
        mask = engine.gen_action_space()
        engine.handle_action_index(int(np.flatnonzero(mask)[0]))
    """

    def __init__(self, config: Optional[Config] = None, seed: Optional[int] = None):
        self.config = config or Config()
        self._lock = threading.RLock()
        self.game = self._new_game(seed)

    def _new_game(self, seed: Optional[int]) -> Game:
        game = Game(self.config, rng=random.Random(seed))
        game.start()
        return game

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        with self._lock:
            self.game = self._new_game(seed)
            return self.snapshot()

    # ==================== 动作 ====================

    def gen_actions(self) -> List[Action]:
        with self._lock:
            return list(self.game.gen_actions())

    def gen_moves(self) -> List[Action]:
        with self._lock:
            return list(self.game.gen_moves())

    def gen_action_space(self) -> np.ndarray:
        with self._lock:
            return self.game.gen_action_space().to_array()

    def action_space_size(self) -> int:
        return self.game.action_space_size()

    def action_from_index(self, index: int) -> Action:
        with self._lock:
            return self.game.action_from_index(index)

    def handle_action(self, action: Action):
        with self._lock:
            self.game.handle_action(action)

    def handle_action_index(self, index: int) -> Action:
        with self._lock:
            return self.game.handle_action_index(index)

    def use_planet(self, planet: Planets):
        with self._lock:
            self.game.use_planet(planet)

    # ==================== 状态 ====================

    def is_over(self) -> bool:
        with self._lock:
            return self.game.is_over()

    def is_win(self) -> bool:
        with self._lock:
            return self.game.is_win()

    def result(self) -> Optional[End]:
        with self._lock:
            return self.game.result()

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            game = self.game
            return GameSnapshot(
                stage=game.stage,
                ante=game.ante,
                round=game.round,
                score=game.score,
                required_score=game.required_score() if game.stage.is_blind() else None,
                plays=game.plays,
                discards=game.discards,
                money=game.money,
                reward=game.reward,
                available=tuple(game.available),
                selected=tuple(game.selected),
                jokers=tuple(game.jokers),
                shop=tuple(game.shop.jokers),
                deck_size=len(game.deck),
                history=tuple(game.action_history),
            )
