"""
游戏状态机与计分

Game 是一局模拟的聚合根，所有规则操作都在这里完成:
- 阶段转移: select_blind / cashout / next_round / handle_score
- 盲注内操作: select_card / move_card / play / discard
- 商店: buy_joker，以及随时可用的 use_planet
- 计分: calc_score
- 动作空间: gen_action_space / action_from_index / index_of_action

每个修改状态的操作要么完整提交，要么抛出 GameError 且不修改任何状态
"""
from typing import List, Optional, Iterator, Iterable
import logging
import math
import random

from .action import Action, ActionType, MoveDirection
from .ante import Ante
from .cards import Card, Deck
from .config import Config
from .effect import EffectRegistry
from .errors import (
    InvalidStage,
    InvalidAction,
    NoRemainingPlays,
    NoRemainingDiscards,
    InvalidBlind,
    InvalidMoveDirection,
    NoCardMatch,
    NoJokerMatch,
    NoJokerSlots,
    InsufficientMoney,
    InvalidHand,
    InvalidIndex,
    PlayHandError,
    NoCards,
    TooManyCards,
)
from .generator import ActionGenerator
from .hand import SelectHand, MadeHand, MAX_HAND_SIZE
from .joker import Jokers
from .planet import Planetarium, Planets
from .shop import Shop
from .space import ActionSpace, segment_offsets
from .stage import Stage, StageKind, Blind, End

logger = logging.getLogger(__name__)


class Game:
    """
    一局游戏

    Attributes:
        config: 游戏配置
        rng: 随机源 (牌堆洗牌与商店刷新共用)
        available: 当前可用的牌 (有序)
        selected: 当前选中的牌 (按选中顺序，均在 available 中)
        discarded: 弃牌堆
        blind: 最近一次选择的盲注
        stage: 当前阶段
        ante: 当前底注等级
        round: 已完成的回合数
        jokers: 持有的小丑牌 (按获得顺序)
        plays / discards: 当前盲注剩余的出牌 / 弃牌次数
        reward: 待结算奖励
        money: 持有金钱
        chips / mult: 计分过程中的临时累加器
        score: 当前盲注累计分数
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        deck: Optional[Deck] = None,
    ):
        self.config = config or Config()
        self.rng = rng or random.Random(seed)

        self.shop = Shop(self.config.store_consumable_slots_max)
        self.deck = deck if deck is not None else Deck(rng=self.rng)
        self.available: List[Card] = []
        self.selected: List[Card] = []
        self.discarded: List[Card] = []

        self.blind: Optional[Blind] = None
        self.stage = Stage.pre_blind()
        self.ante: Ante = self.config.ante_start
        self.round = 0
        self.action_history: List[Action] = []

        self.jokers: List[Jokers] = []
        self.effect_registry = EffectRegistry()
        self.planetarium = Planetarium()

        self.plays = self.config.plays
        self.discards = self.config.discards
        self.reward = self.config.reward_base
        self.money = self.config.money_start

        self.chips = self.config.base_chips
        self.mult = self.config.base_mult
        self.score = self.config.base_score

        self.generator = ActionGenerator(self)

    # ==================== 生命周期 ====================

    def start(self):
        """进入 PreBlind 并发牌"""
        self.stage = Stage.pre_blind()
        self.deal()
        logger.debug(f"Game started: ante={self.ante.name}, available={len(self.available)}")

    def result(self) -> Optional[End]:
        if self.stage.is_end:
            return self.stage.end
        return None

    def is_over(self) -> bool:
        return self.result() is not None

    def is_win(self) -> bool:
        return self.result() == End.WIN

    def clear_blind(self):
        """重置分数和出牌 / 弃牌次数，并重新发牌"""
        self.score = self.config.base_score
        self.plays = self.config.plays
        self.discards = self.config.discards
        self.deal()

    def draw(self, count: int):
        """从牌堆抽至多 count 张牌到可用牌"""
        self.available.extend(self.deck.draw(count))

    def deal(self):
        """回收可用牌与弃牌，洗牌后重新发 hand_size 张"""
        self.deck.append(self.discarded)
        self.deck.append(self.available)
        self.discarded = []
        self.available = []
        self.selected = []
        self.deck.shuffle()
        self.draw(self.config.hand_size)

    def next_blind(self) -> Blind:
        """下一个应当选择的盲注"""
        if self.blind is None:
            return Blind.SMALL
        return self.blind.next()

    # ==================== 阶段转移 ====================

    def select_blind(self, blind: Blind):
        if self.stage.kind != StageKind.PRE_BLIND:
            raise InvalidStage(f"Cannot select blind in stage {self.stage}")
        if blind != self.next_blind():
            raise InvalidBlind(f"Expected {self.next_blind().value} blind, got {blind.value}")
        self.blind = blind
        self.stage = Stage.in_blind(blind)
        logger.info(f"Round {self.round}: ante {self.ante.name} {blind.value} blind selected, "
                    f"required {self.required_score()}")

    def cashout(self):
        if self.stage.kind != StageKind.POST_BLIND:
            raise InvalidStage(f"Cannot cash out in stage {self.stage}")
        self.money += self.reward
        logger.debug(f"Cash out {self.reward}, money={self.money}")
        self.reward = 0
        self.stage = Stage.shop()
        self.shop.refresh(self.rng)

    def next_round(self):
        if self.stage.kind != StageKind.SHOP:
            raise InvalidStage(f"Cannot start next round in stage {self.stage}")
        self.stage = Stage.pre_blind()
        self.round += 1

    def required_score(self) -> int:
        """当前盲注需要达到的分数 (Small x1, Big x1.5 向下取整, Boss x2)"""
        if not self.stage.is_blind():
            raise InvalidStage("Required score only defined during a blind")
        base = self.ante.base()
        blind = self.stage.blind
        if blind == Blind.SMALL:
            return base
        if blind == Blind.BIG:
            return base * 3 // 2
        return base * 2

    def calc_reward(self, blind: Blind) -> int:
        """盲注奖励 + 利息 (有上限) + 剩余出牌次数奖励"""
        interest = min(math.floor(self.money * self.config.interest_rate), self.config.interest_max)
        hand_bonus = self.plays * self.config.money_per_hand
        return blind.reward() + self.config.reward_base + interest + hand_bonus

    def handle_score(self, score: int) -> bool:
        """
        累加分数并结算盲注

        Returns:
            是否通过当前盲注
        """
        if not self.stage.is_blind():
            raise InvalidStage(f"Cannot score in stage {self.stage}")

        self.score += score
        required = self.required_score()

        if self.score < required:
            if self.plays == 0:
                self.stage = Stage.ended(End.LOSE)
                logger.info(f"Lost at ante {self.ante.name} {self.blind.value} blind: "
                            f"{self.score}/{required}")
            return False

        blind = self.stage.blind
        self.reward = self.calc_reward(blind)
        logger.info(f"Passed {blind.value} blind: {self.score}/{required}, reward {self.reward}")

        if blind == Blind.BOSS:
            next_ante = self.ante.next()
            if next_ante is None or self.ante >= self.config.ante_end:
                self.stage = Stage.ended(End.WIN)
                logger.info(f"Won at ante {self.ante.name} after {self.round} rounds")
                return True
            self.ante = next_ante

        self.stage = Stage.post_blind()
        return True

    # ==================== 盲注内操作 ====================

    def _require_blind(self):
        if not self.stage.is_blind():
            raise InvalidStage(f"Action requires a blind stage, current {self.stage}")

    def select_card(self, card: Card):
        """选中一张可用牌；已选中的牌再次选择会取消选中"""
        self._require_blind()
        if card not in self.available:
            raise NoCardMatch(f"Card {card} not available")
        if card in self.selected:
            self.selected.remove(card)
            return
        if len(self.selected) >= self.config.selected_max:
            raise InvalidAction(f"Cannot select more than {self.config.selected_max} cards")
        self.selected.append(card)

    def move_card(self, direction: MoveDirection, card: Card):
        """与相邻的牌交换位置"""
        self._require_blind()
        try:
            i = self.available.index(card)
        except ValueError:
            raise NoCardMatch(f"Card {card} not available") from None
        if direction == MoveDirection.LEFT:
            if i == 0:
                raise InvalidMoveDirection("First card cannot move left")
            j = i - 1
        else:
            if i >= len(self.available) - 1:
                raise InvalidMoveDirection("Last card cannot move right")
            j = i + 1
        self.available[i], self.available[j] = self.available[j], self.available[i]

    def _resolve_hand(self, hand: Optional[SelectHand]) -> SelectHand:
        if hand is None:
            return SelectHand(self.selected)
        return hand

    def _remaining_after(self, cards: Iterable[Card]) -> List[Card]:
        """从可用牌中移除指定的牌，返回剩余部分 (不修改状态)"""
        remaining = list(self.available)
        for card in cards:
            try:
                remaining.remove(card)
            except ValueError:
                raise NoCardMatch(f"Card {card} not available") from None
        return remaining

    def _evaluate(self, hand: SelectHand) -> MadeHand:
        try:
            return hand.best_hand()
        except PlayHandError as e:
            raise InvalidHand(e) from e

    def _replace_cards(self, hand: SelectHand, remaining: List[Card]):
        """把打出 / 弃掉的牌移入弃牌堆并补牌"""
        self.available = remaining
        self.discarded.extend(hand.cards)
        self.selected = []
        self.draw(len(hand))

    def play(self, hand: Optional[SelectHand] = None):
        """
        打出一手牌 (默认为当前选中的牌)

        所有校验 (阶段、次数、牌是否可用、牌型) 都在扣减出牌次数之前完成
        """
        self._require_blind()
        if self.plays <= 0:
            raise NoRemainingPlays()
        hand = self._resolve_hand(hand)
        made = self._evaluate(hand)
        remaining = self._remaining_after(hand.cards)

        self.plays -= 1
        score = self.calc_score(made)
        logger.debug(f"Played {made.rank.name} ({len(hand)} cards) for {score}")
        passed = self.handle_score(score)
        self._replace_cards(hand, remaining)
        if passed and not self.is_over():
            self.clear_blind()

    def discard(self, hand: Optional[SelectHand] = None):
        """弃掉一手牌 (默认为当前选中的牌) 并补牌"""
        self._require_blind()
        if self.discards <= 0:
            raise NoRemainingDiscards()
        hand = self._resolve_hand(hand)
        if len(hand) == 0:
            raise InvalidHand(NoCards())
        if len(hand) > MAX_HAND_SIZE:
            raise InvalidHand(TooManyCards())
        remaining = self._remaining_after(hand.cards)

        self.discards -= 1
        self._replace_cards(hand, remaining)

    # ==================== 计分 ====================

    def calc_score(self, hand: MadeHand) -> int:
        """
        计算一手牌的分数

        1. 牌型等级的筹码 / 倍率 (同时累计出牌次数)
        2. 计分牌的筹码
        3. 按获得顺序执行 on_score 效果
        4. 分数 = chips * mult，然后重置累加器
        """
        level = self.planetarium.play(hand.rank)
        self.chips += level.chips
        self.mult += level.mult
        self.chips += hand.hand.chips()

        for effect in self.effect_registry.on_score:
            effect.apply(self, hand)

        score = self.chips * self.mult
        self.chips = self.config.base_chips
        self.mult = self.config.base_mult
        return score

    # ==================== 商店 / 星球 ====================

    def buy_joker(self, joker: Jokers):
        if self.stage.kind != StageKind.SHOP:
            raise InvalidStage(f"Cannot buy joker in stage {self.stage}")
        if len(self.jokers) >= self.config.joker_slots:
            raise NoJokerSlots()
        if not self.shop.has_joker(joker):
            raise NoJokerMatch(f"{joker.display_name} not in shop")
        if joker.cost > self.money:
            raise InsufficientMoney(f"{joker.display_name} costs {joker.cost}, have {self.money}")

        self.money -= joker.cost
        self.shop.buy_joker(joker)
        self.jokers.append(joker)
        self.effect_registry.register_jokers(self.jokers, self)
        logger.info(f"Bought {joker.display_name} for {joker.cost}, money={self.money}")

    def use_planet(self, planet: Planets):
        """立即提升对应牌型等级 (终局后不可用)"""
        if self.is_over():
            raise InvalidStage("Game is over")
        planet.effect(self)
        logger.debug(f"Used {planet.display_name} on {planet.hand_rank.name}")

    # ==================== 动作 ====================

    def gen_actions(self) -> Iterator[Action]:
        return self.generator.gen_actions()

    def gen_moves(self) -> Iterator[Action]:
        return self.generator.gen_moves()

    def handle_action(self, action: Action):
        """
        执行动作，成功后记入动作历史

        Raises:
            InvalidAction: 动作与当前阶段不匹配
            GameError: 其它规则违例
        """
        t = action.action_type
        kind = self.stage.kind

        if action.is_blind_scoped and kind != StageKind.BLIND:
            raise InvalidAction(f"{action} not allowed in stage {self.stage}")

        if t == ActionType.SELECT_CARD:
            self.select_card(action.card)
        elif t == ActionType.MOVE_CARD:
            self.move_card(action.direction, action.card)
        elif t == ActionType.PLAY:
            self.play(action.hand)
        elif t == ActionType.DISCARD:
            self.discard(action.hand)
        elif t == ActionType.CASH_OUT:
            if kind != StageKind.POST_BLIND:
                raise InvalidAction(f"{action} not allowed in stage {self.stage}")
            self.cashout()
        elif t == ActionType.BUY_JOKER:
            if kind != StageKind.SHOP:
                raise InvalidAction(f"{action} not allowed in stage {self.stage}")
            self.buy_joker(action.joker)
        elif t == ActionType.NEXT_ROUND:
            if kind != StageKind.SHOP:
                raise InvalidAction(f"{action} not allowed in stage {self.stage}")
            self.next_round()
        elif t == ActionType.SELECT_BLIND:
            if kind != StageKind.PRE_BLIND:
                raise InvalidAction(f"{action} not allowed in stage {self.stage}")
            self.select_blind(action.blind)
        else:
            raise InvalidAction(f"Unknown action type {t}")

        self.action_history.append(action)

    def handle_action_index(self, index: int) -> Action:
        """
        按动作空间索引执行动作，返回解码后的动作

        Raises:
            InvalidIndex: 索引越界
            InvalidAction: 索引在当前掩码中不可用
        """
        size = self.action_space_size()
        if not 0 <= index < size:
            raise InvalidIndex(index, size)
        if not self.gen_action_space().to_array()[index]:
            raise InvalidAction(f"Action index {index} is masked in stage {self.stage}")
        action = self.action_from_index(index)
        self.handle_action(action)
        return action

    # ==================== 动作空间 ====================

    def gen_action_space(self) -> ActionSpace:
        """根据当前状态生成动作掩码"""
        space = ActionSpace.from_config(self.config)
        kind = self.stage.kind
        am = self.config.available_max

        if kind == StageKind.BLIND:
            if len(self.selected) < self.config.selected_max:
                for i in range(min(len(self.available), am)):
                    space.unmask_select_card(i)
            if self.selected and self.plays > 0:
                space.unmask_play()
            if self.selected and self.discards > 0:
                space.unmask_discard()
            if len(self.selected) == 1:
                i = self.available.index(self.selected[0])
                # 左移槽位 i-1 对应位置 i 的牌，右移槽位 i 对应位置 i 的牌
                if 0 < i < am:
                    space.unmask_move_card_left(i - 1)
                if i < len(self.available) - 1 and i < am - 1:
                    space.unmask_move_card_right(i)
        elif kind == StageKind.POST_BLIND:
            space.unmask_cash_out()
        elif kind == StageKind.SHOP:
            space.unmask_next_round()
            if len(self.jokers) < self.config.joker_slots:
                for i, joker in enumerate(self.shop.jokers[:self.config.store_consumable_slots_max]):
                    if joker.cost <= self.money:
                        space.unmask_buy_joker(i)
        elif kind == StageKind.PRE_BLIND:
            space.unmask_select_blind()

        return space

    def action_space_size(self) -> int:
        return ActionSpace.from_config(self.config).size()

    def _card_at(self, i: int) -> Card:
        if i >= len(self.available):
            raise NoCardMatch(f"No card at position {i}")
        return self.available[i]

    def action_from_index(self, index: int) -> Action:
        """
        把动作空间索引解码为具体动作

        Raises:
            InvalidIndex: 索引越界
            NoCardMatch / NoJokerMatch: 索引指向不存在的牌 / 小丑牌
        """
        offsets = segment_offsets(self.config)
        size = self.action_space_size()
        if not 0 <= index < size:
            raise InvalidIndex(index, size)

        for name, (start, end) in offsets.items():
            if start <= index < end:
                i = index - start
                break

        if name == 'select_card':
            return Action.select_card(self._card_at(i))
        if name == 'move_card_left':
            return Action.move_card(MoveDirection.LEFT, self._card_at(i + 1))
        if name == 'move_card_right':
            return Action.move_card(MoveDirection.RIGHT, self._card_at(i))
        if name == 'play':
            return Action.play(SelectHand(self.selected))
        if name == 'discard':
            return Action.discard(SelectHand(self.selected))
        if name == 'cash_out':
            return Action.cash_out(self.reward)
        if name == 'buy_joker':
            joker = self.shop.joker_from_index(i)
            if joker is None:
                raise NoJokerMatch(f"No joker in shop slot {i}")
            return Action.buy_joker(joker)
        if name == 'next_round':
            return Action.next_round()
        return Action.select_blind(self.next_blind())

    def index_of_action(self, action: Action) -> int:
        """把动作编码为动作空间索引 (action_from_index 的逆)"""
        offsets = segment_offsets(self.config)
        t = action.action_type

        if t == ActionType.SELECT_CARD:
            return offsets['select_card'][0] + self._position_of(action.card)
        if t == ActionType.MOVE_CARD:
            i = self._position_of(action.card)
            if action.direction == MoveDirection.LEFT:
                if i == 0:
                    raise InvalidMoveDirection("First card cannot move left")
                return offsets['move_card_left'][0] + i - 1
            if i >= len(self.available) - 1:
                raise InvalidMoveDirection("Last card cannot move right")
            return offsets['move_card_right'][0] + i
        if t == ActionType.PLAY:
            return offsets['play'][0]
        if t == ActionType.DISCARD:
            return offsets['discard'][0]
        if t == ActionType.CASH_OUT:
            return offsets['cash_out'][0]
        if t == ActionType.BUY_JOKER:
            if not self.shop.has_joker(action.joker):
                raise NoJokerMatch(f"{action.joker.display_name} not in shop")
            return offsets['buy_joker'][0] + self.shop.jokers.index(action.joker)
        if t == ActionType.NEXT_ROUND:
            return offsets['next_round'][0]
        return offsets['select_blind'][0]

    def _position_of(self, card: Card) -> int:
        try:
            return self.available.index(card)
        except ValueError:
            raise NoCardMatch(f"Card {card} not available") from None

    def __str__(self) -> str:
        lines = [
            f"stage: {self.stage}",
            f"ante: {self.ante.name}",
            f"round: {self.round}",
            f"blind: {self.blind.value if self.blind else None}",
            f"score: {self.score}",
            f"plays: {self.plays}, discards: {self.discards}",
            f"money: {self.money}, reward: {self.reward}",
            f"available: {' '.join(str(c) for c in self.available)}",
            f"selected: {' '.join(str(c) for c in self.selected)}",
            f"jokers: {', '.join(j.display_name for j in self.jokers)}",
            f"deck: {len(self.deck)}, discarded: {len(self.discarded)}",
        ]
        return '\n'.join(lines)
