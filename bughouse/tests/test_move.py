import chess
import pytest

from bughouse.errors import MoveParseError
from bughouse.move import Move


def test_parse_drop():
    move = Move.parse("N@e4")
    assert move.is_drop is True
    assert move == Move.drop(chess.KNIGHT, chess.E4)
    assert move.source is None


def test_drop_letter_case_is_ignored():
    assert Move.parse("n@E4") == Move.parse("N@e4")
    assert Move.parse("p@f7") == Move.drop(chess.PAWN, chess.F7)


def test_king_drop_is_rejected():
    with pytest.raises(MoveParseError) as excinfo:
        Move.parse("K@e4")
    assert excinfo.value.text == "K@e4"
    with pytest.raises(ValueError):
        Move.drop(chess.KING, chess.E4)


def test_parse_standard_move():
    move = Move.parse("e2e4")
    assert move.is_drop is False
    assert move == Move.standard(chess.E2, chess.E4)
    assert move.to_internal() == chess.Move.from_uci("e2e4")


def test_parse_promotion():
    move = Move.parse("e7e8q")
    assert move.promotion == chess.QUEEN
    assert move.to_internal() == chess.Move(chess.E7, chess.E8, chess.QUEEN)


@pytest.mark.parametrize("text", ["", "hello", "0000", "e2", "e7e8k", "Q@i9", "e2e4e5"])
def test_bad_move_text(text):
    with pytest.raises(MoveParseError):
        Move.parse(text)


def test_serialize_is_canonical():
    assert str(Move.parse("q@D5")) == "Q@d5"
    assert str(Move.parse("E7E8Q")) == "e7e8q"
    assert str(Move.parse("g1f3")) == "g1f3"


def test_serialized_text_parses_back():
    for text in ["N@e4", "p@b3", "e2e4", "a7a8n"]:
        move = Move.parse(text)
        assert Move.parse(str(move)) == move


def test_drop_has_no_chess_move():
    with pytest.raises(ValueError):
        Move.drop(chess.ROOK, chess.A3).to_internal()


def test_moves_are_immutable():
    move = Move.parse("e2e4")
    with pytest.raises(AttributeError):
        move.dest = chess.E5
