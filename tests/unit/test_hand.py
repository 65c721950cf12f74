"""牌型评估测试"""
import pytest

from core.cards import str_to_cards, Value
from core.errors import PlayHandError, TooManyCards, NoCards
from core.hand import HandRank, SelectHand, best_hand


def rank_of(s: str) -> HandRank:
    return best_hand(str_to_cards(s)).rank


class TestBestHand:
    """best_hand 测试"""

    @pytest.mark.parametrize("cards,expected", [
        ("Ah", HandRank.HIGH_CARD),
        ("Ah Kd Jc", HandRank.HIGH_CARD),
        ("Kd Kd Ah", HandRank.ONE_PAIR),
        ("Kd Kh Ah As", HandRank.TWO_PAIR),
        ("Ah Ah Ah Kd", HandRank.THREE_OF_A_KIND),
        ("9h Td Jc Qs Kh", HandRank.STRAIGHT),
        ("Ah 2d 3c 4s 5h", HandRank.STRAIGHT),
        ("2h 5h 9h Jh Kh", HandRank.FLUSH),
        ("Kd Kh Ks 2c 2d", HandRank.FULL_HOUSE),
        ("Kd Kd Kd Kd Ah", HandRank.FOUR_OF_A_KIND),
        ("5h 6h 7h 8h 9h", HandRank.STRAIGHT_FLUSH),
        ("Th Jh Qh Kh Ah", HandRank.ROYAL_FLUSH),
        ("Ah As Ad Ac Ah", HandRank.FIVE_OF_A_KIND),
        ("Kh Kh Kh 2h 2h", HandRank.FLUSH_HOUSE),
        ("Jc Jc Jc Jc Jc", HandRank.FLUSH_FIVE),
    ])
    def test_ranks(self, cards, expected):
        assert rank_of(cards) == expected

    def test_four_card_straight_is_not_straight(self):
        assert rank_of("9h Td Jc Qs") == HandRank.HIGH_CARD

    def test_four_card_flush_is_not_flush(self):
        assert rank_of("2h 5h 9h Jh") == HandRank.HIGH_CARD

    def test_no_cards(self):
        with pytest.raises(NoCards):
            best_hand([])

    def test_too_many_cards(self):
        with pytest.raises(TooManyCards):
            best_hand(str_to_cards("2h 3h 4h 5h 6h 7h"))

    def test_error_kinds(self):
        # 评估只会因为张数失败
        assert set(PlayHandError.__subclasses__()) == {TooManyCards, NoCards}


class TestScoringCards:
    """计分牌测试"""

    def test_high_card_scores_highest_only(self):
        made = best_hand(str_to_cards("Ah Kd Jc"))
        assert len(made.hand) == 1
        assert made.hand.cards[0].value == Value.ACE
        assert len(made.all) == 3

    def test_pair_scores_pair_only(self):
        made = best_hand(str_to_cards("Kd Kd Ah"))
        assert [c.value for c in made.hand] == [Value.KING, Value.KING]

    def test_four_of_a_kind_excludes_kicker(self):
        made = best_hand(str_to_cards("Kd Kd Kd Kd Ah"))
        assert made.hand.chips() == 40

    def test_flush_scores_all(self):
        made = best_hand(str_to_cards("2h 5h 9h Jh Kh"))
        assert len(made.hand) == 5


class TestContains:
    """子牌型包含关系测试"""

    def test_full_house_contains_pair_and_three(self):
        made = best_hand(str_to_cards("Kd Kh Ks 2c 2d"))
        assert made.contains(HandRank.ONE_PAIR)
        assert made.contains(HandRank.THREE_OF_A_KIND)
        assert made.contains(HandRank.TWO_PAIR)
        assert not made.contains(HandRank.FLUSH)

    def test_straight_flush_contains_straight_and_flush(self):
        made = best_hand(str_to_cards("5h 6h 7h 8h 9h"))
        assert made.contains(HandRank.STRAIGHT)
        assert made.contains(HandRank.FLUSH)
        assert not made.contains(HandRank.ONE_PAIR)

    def test_high_card_contains_only_itself(self):
        made = best_hand(str_to_cards("Ah Kd Jc"))
        assert made.contains(HandRank.HIGH_CARD)
        assert not made.contains(HandRank.ONE_PAIR)


class TestSelectHand:
    """SelectHand 测试"""

    def test_keeps_order(self):
        cards = str_to_cards("Kd Ah 2c")
        hand = SelectHand(cards)
        assert list(hand) == cards

    def test_chips(self):
        assert SelectHand(str_to_cards("Ah Kd 2c")).chips() == 23

    def test_best_hand_delegates(self):
        assert SelectHand(str_to_cards("Kd Kd Ah")).best_hand().rank == HandRank.ONE_PAIR
