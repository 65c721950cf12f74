"""
异常定义

所有规则违例都以 GameError 子类抛出，由驱动层 (engine / env) 负责呈现
"""


class PlayHandError(Exception):
    """出牌牌型评估失败"""


class TooManyCards(PlayHandError):
    def __init__(self):
        super().__init__("Played hand contains more than 5 cards")


class NoCards(PlayHandError):
    def __init__(self):
        super().__init__("Played hand contains no cards")


class GameError(Exception):
    """游戏规则错误基类"""
    message = "Game error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.message)


class InvalidStage(GameError):
    message = "Invalid stage"


class InvalidAction(GameError):
    message = "Invalid action"


class NoRemainingPlays(GameError):
    message = "No remaining plays"


class NoRemainingDiscards(GameError):
    message = "No remaining discards"


class InvalidBlind(GameError):
    message = "Invalid blind"


class InvalidMoveDirection(GameError):
    message = "Invalid move direction"


class NoCardMatch(GameError):
    message = "No card match"


class NoJokerMatch(GameError):
    message = "No joker match"


class NoJokerSlots(GameError):
    message = "No joker slots available"


class InsufficientMoney(GameError):
    message = "Insufficient money"


class InvalidHand(GameError):
    """包装 PlayHandError"""
    message = "Invalid hand played"

    def __init__(self, cause: PlayHandError):
        super().__init__(f"{self.message}: {cause}")
        self.cause = cause


class ActionSpaceError(Exception):
    """动作空间错误基类"""


class InvalidIndex(ActionSpaceError):
    def __init__(self, index: int, size: int):
        super().__init__(f"Invalid action space index: {index} (size {size})")
        self.index = index
        self.size = size
