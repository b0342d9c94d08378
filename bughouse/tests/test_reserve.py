import chess
import pytest

from bughouse.errors import IllegalMove, InsufficientReserve, ReserveParseError
from bughouse.reserve import Reserve


def test_new_reserve_is_empty():
    reserve = Reserve()
    for color in chess.COLORS:
        for piece_type in (chess.PAWN, chess.KNIGHT, chess.BISHOP, chess.ROOK, chess.QUEEN):
            assert reserve.has_piece(color, piece_type) is False
    assert str(reserve) == ""


def test_add_then_remove_restores_reserve():
    reserve = Reserve.from_str("Qnp")
    before = reserve.copy()

    for color in chess.COLORS:
        for piece_type in (chess.PAWN, chess.KNIGHT, chess.BISHOP, chess.ROOK, chess.QUEEN):
            reserve.add(color, piece_type)
            assert reserve.count(color, piece_type) == before.count(color, piece_type) + 1
            reserve.remove(color, piece_type)
            assert reserve == before


def test_remove_from_empty_fails_without_changes():
    reserve = Reserve.from_str("N")

    with pytest.raises(InsufficientReserve) as excinfo:
        reserve.remove(chess.BLACK, chess.KNIGHT)

    # Still an illegal move as far as callers are concerned
    assert isinstance(excinfo.value, IllegalMove)
    assert excinfo.value.color == chess.BLACK
    assert excinfo.value.piece_type == chess.KNIGHT
    assert reserve == Reserve.from_str("N")


def test_kings_are_never_held():
    reserve = Reserve()
    assert reserve.has_piece(chess.WHITE, chess.KING) is False
    with pytest.raises(ValueError):
        reserve.add(chess.WHITE, chess.KING)
    with pytest.raises(ReserveParseError):
        Reserve.from_str("k")


def test_parse_holdings_field():
    reserve = Reserve.from_str("BrpBBqppN")

    assert reserve.count(chess.WHITE, chess.BISHOP) == 3
    assert reserve.count(chess.WHITE, chess.KNIGHT) == 1
    assert reserve.count(chess.WHITE, chess.PAWN) == 0
    assert reserve.count(chess.BLACK, chess.PAWN) == 3
    assert reserve.count(chess.BLACK, chess.ROOK) == 1
    assert reserve.count(chess.BLACK, chess.QUEEN) == 1

    # Canonical order: white first, heaviest piece first
    assert str(reserve) == "BBBNqrppp"


def test_unknown_letter_is_rejected():
    with pytest.raises(ReserveParseError) as excinfo:
        Reserve.from_str("Nx")
    assert excinfo.value.text == "Nx"


def test_reserve_has_no_cap():
    reserve = Reserve()
    for _ in range(20):
        reserve.add(chess.WHITE, chess.PAWN)
    assert reserve.count(chess.WHITE, chess.PAWN) == 20


def test_as_dict_lists_only_held_pieces():
    reserve = Reserve.from_str("NNq")
    assert reserve.as_dict() == {
        "white": {"knight": 2},
        "black": {"queen": 1},
    }
