"""
Core Layer - 纯游戏逻辑 (无 RL 依赖)

Modules:
    cards: 牌与牌堆
    hand: 牌型评估
    ante / stage: 底注与阶段
    planet: 牌型等级与星球牌
    joker / effect: 小丑牌目录与效果注册表
    shop: 商店
    action / generator / space: 动作、动作生成与动作掩码
    game: 状态机与计分
    engine: 线程安全门面
"""
from .cards import (
    Value,
    Suit,
    Card,
    Deck,
    standard_deck,
    str_to_cards,
    cards_to_str,
    card_index,
    cards_to_array,
)

from .hand import (
    HandRank,
    SelectHand,
    MadeHand,
    best_hand,
    MAX_HAND_SIZE,
)

from .ante import Ante
from .stage import Blind, End, Stage, StageKind
from .config import Config

from .errors import (
    GameError,
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
    PlayHandError,
    TooManyCards,
    NoCards,
    ActionSpaceError,
    InvalidIndex,
)

from .planet import Level, Planetarium, Planets
from .effect import Effect, EffectTrigger, EffectRegistry
from .joker import Jokers, Rarity, Categories
from .shop import Shop
from .action import Action, ActionType, MoveDirection
from .space import ActionSpace, segment_offsets
from .generator import ActionGenerator
from .game import Game
from .engine import GameEngine, GameSnapshot

__all__ = [
    # cards
    "Value",
    "Suit",
    "Card",
    "Deck",
    "standard_deck",
    "str_to_cards",
    "cards_to_str",
    "card_index",
    "cards_to_array",
    # hand
    "HandRank",
    "SelectHand",
    "MadeHand",
    "best_hand",
    "MAX_HAND_SIZE",
    # stage
    "Ante",
    "Blind",
    "End",
    "Stage",
    "StageKind",
    "Config",
    # errors
    "GameError",
    "InvalidStage",
    "InvalidAction",
    "NoRemainingPlays",
    "NoRemainingDiscards",
    "InvalidBlind",
    "InvalidMoveDirection",
    "NoCardMatch",
    "NoJokerMatch",
    "NoJokerSlots",
    "InsufficientMoney",
    "InvalidHand",
    "PlayHandError",
    "TooManyCards",
    "NoCards",
    "ActionSpaceError",
    "InvalidIndex",
    # modifiers
    "Level",
    "Planetarium",
    "Planets",
    "Effect",
    "EffectTrigger",
    "EffectRegistry",
    "Jokers",
    "Rarity",
    "Categories",
    "Shop",
    # actions
    "Action",
    "ActionType",
    "MoveDirection",
    "ActionSpace",
    "segment_offsets",
    "ActionGenerator",
    # game
    "Game",
    "GameEngine",
    "GameSnapshot",
]
