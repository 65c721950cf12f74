"""
底注等级 (Ante)

每个 Ante 有固定的基础分数要求，击败 Boss 盲注后进入下一级
"""
from enum import IntEnum
from typing import Optional


class Ante(IntEnum):
    """底注等级 0-8"""
    ZERO = 0
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8

    def base(self) -> int:
        """基础分数要求"""
        return ANTE_BASE[self]

    def next(self) -> Optional['Ante']:
        """下一级，EIGHT 之后为 None"""
        if self == Ante.EIGHT:
            return None
        return Ante(self + 1)


ANTE_BASE = {
    Ante.ZERO: 100,
    Ante.ONE: 300,
    Ante.TWO: 800,
    Ante.THREE: 2000,
    Ante.FOUR: 5000,
    Ante.FIVE: 11000,
    Ante.SIX: 20000,
    Ante.SEVEN: 35000,
    Ante.EIGHT: 50000,
}
