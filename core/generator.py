"""
合法动作生成器

两种变体:
- gen_actions_*: 基于当前选中牌 (出牌 / 弃牌使用选中的牌)
- gen_moves_*: 组合枚举，出牌 / 弃牌直接携带 1-5 张牌的子集

每个类别在不合法时返回 None，否则返回惰性迭代器
汇总时按固定顺序拼接: select / play / discard / move / cashout / next_round / select_blind / buy_joker
"""
from typing import Iterator, Optional, TYPE_CHECKING
import itertools

from .action import Action, MoveDirection
from .hand import SelectHand, MAX_HAND_SIZE
from .stage import StageKind

if TYPE_CHECKING:
    from .game import Game


class ActionGenerator:
    """
    根据游戏状态枚举合法动作

    只读取游戏状态，不做任何修改
    """

    def __init__(self, game: 'Game'):
        self.game = game

    # ==================== 基于选中牌 ====================

    def gen_actions_select_card(self) -> Optional[Iterator[Action]]:
        game = self.game
        if not game.stage.is_blind():
            return None
        if len(game.selected) >= game.config.selected_max:
            return None
        return (Action.select_card(c) for c in list(game.available))

    def gen_actions_play(self) -> Optional[Iterator[Action]]:
        game = self.game
        if not game.stage.is_blind() or game.plays <= 0 or not game.selected:
            return None
        return iter([Action.play(SelectHand(game.selected))])

    def gen_actions_discard(self) -> Optional[Iterator[Action]]:
        game = self.game
        if not game.stage.is_blind() or game.discards <= 0 or not game.selected:
            return None
        return iter([Action.discard(SelectHand(game.selected))])

    def gen_actions_move_card(self) -> Optional[Iterator[Action]]:
        """只有恰好选中一张牌时才能移牌，边界方向不生成"""
        game = self.game
        if not game.stage.is_blind() or len(game.selected) != 1:
            return None
        card = game.selected[0]
        i = game.available.index(card)
        actions = []
        if i > 0:
            actions.append(Action.move_card(MoveDirection.LEFT, card))
        if i < len(game.available) - 1:
            actions.append(Action.move_card(MoveDirection.RIGHT, card))
        if not actions:
            return None
        return iter(actions)

    def gen_actions_cash_out(self) -> Optional[Iterator[Action]]:
        if self.game.stage.kind != StageKind.POST_BLIND:
            return None
        return iter([Action.cash_out(self.game.reward)])

    def gen_actions_next_round(self) -> Optional[Iterator[Action]]:
        if self.game.stage.kind != StageKind.SHOP:
            return None
        return iter([Action.next_round()])

    def gen_actions_select_blind(self) -> Optional[Iterator[Action]]:
        if self.game.stage.kind != StageKind.PRE_BLIND:
            return None
        return iter([Action.select_blind(self.game.next_blind())])

    def gen_actions_buy_joker(self) -> Optional[Iterator[Action]]:
        game = self.game
        if game.stage.kind != StageKind.SHOP:
            return None
        if len(game.jokers) >= game.config.joker_slots:
            return None
        jokers = game.shop.gen_moves_buy_joker(game.money)
        if jokers is None:
            return None
        return (Action.buy_joker(j) for j in jokers)

    def gen_actions(self) -> Iterator[Action]:
        """所有合法动作 (基于选中牌)"""
        return _chain(
            self.gen_actions_select_card(),
            self.gen_actions_play(),
            self.gen_actions_discard(),
            self.gen_actions_move_card(),
            self.gen_actions_cash_out(),
            self.gen_actions_next_round(),
            self.gen_actions_select_blind(),
            self.gen_actions_buy_joker(),
        )

    # ==================== 组合枚举 ====================

    def _subsets(self) -> Iterator[SelectHand]:
        """按 5, 4, 3, 2, 1 张的顺序枚举可用牌的全部子集"""
        available = list(self.game.available)
        for k in range(min(MAX_HAND_SIZE, len(available)), 0, -1):
            for combo in itertools.combinations(available, k):
                yield SelectHand(combo)

    def gen_moves_play(self) -> Optional[Iterator[Action]]:
        game = self.game
        if not game.stage.is_blind() or game.plays <= 0 or not game.available:
            return None
        return (Action.play(hand) for hand in self._subsets())

    def gen_moves_discard(self) -> Optional[Iterator[Action]]:
        game = self.game
        if not game.stage.is_blind() or game.discards <= 0 or not game.available:
            return None
        return (Action.discard(hand) for hand in self._subsets())

    def gen_moves_move_card(self) -> Optional[Iterator[Action]]:
        """首张只能右移，末张只能左移，中间的牌两个方向都可以"""
        game = self.game
        if not game.stage.is_blind() or len(game.available) < 2:
            return None
        return self._iter_moves(list(game.available))

    @staticmethod
    def _iter_moves(available) -> Iterator[Action]:
        last = len(available) - 1
        for i, card in enumerate(available):
            if i > 0:
                yield Action.move_card(MoveDirection.LEFT, card)
            if i < last:
                yield Action.move_card(MoveDirection.RIGHT, card)

    def gen_moves(self) -> Iterator[Action]:
        """所有合法动作 (组合枚举)"""
        return _chain(
            self.gen_moves_play(),
            self.gen_moves_discard(),
            self.gen_moves_move_card(),
            self.gen_actions_cash_out(),
            self.gen_actions_next_round(),
            self.gen_actions_select_blind(),
            self.gen_actions_buy_joker(),
        )


def _chain(*categories: Optional[Iterator[Action]]) -> Iterator[Action]:
    """拼接各类别，跳过不合法 (None) 的类别"""
    return itertools.chain.from_iterable(c for c in categories if c is not None)
