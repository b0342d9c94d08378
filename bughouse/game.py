import logging
from enum import Enum
from typing import Optional, Tuple, Union

import chess

from bughouse.board import Board
from bughouse.const import GAME_SEPARATOR
from bughouse.errors import GameParseError
from bughouse.move import Move

log = logging.getLogger(__name__)


class BoardId(str, Enum):
    A = "a"
    B = "b"

    @property
    def partner(self) -> "BoardId":
        return BoardId.B if self is BoardId.A else BoardId.A


class Game:
    """
    A bughouse match: two boards, where whatever is captured on one board
    lands in a reserve on the other.
    """

    def __init__(self, a: Optional[Board] = None, b: Optional[Board] = None) -> None:
        self._boards = {
            BoardId.A: a if a is not None else Board(),
            BoardId.B: b if b is not None else Board(),
        }

    @classmethod
    def from_fen(cls, text: str) -> "Game":
        """Parse two board BFENs joined by " | "."""
        boards = text.count(GAME_SEPARATOR) + 1
        if boards != 2:
            raise GameParseError(text, f"expected 2 boards separated by {GAME_SEPARATOR.strip()!r}, found {boards}")
        a_text, b_text = text.split(GAME_SEPARATOR)
        return cls(Board.from_fen(a_text), Board.from_fen(b_text))

    def fen(self) -> str:
        return GAME_SEPARATOR.join(self._boards[board_id].fen() for board_id in BoardId)

    def board(self, board_id: BoardId) -> Board:
        return self._boards[BoardId(board_id)]

    def reset(self) -> None:
        """Reset both boards to the initial position."""
        self._boards = {board_id: Board() for board_id in BoardId}

    def make_move(self, board_id: BoardId, move: Union[Move, str]) -> None:
        """
        Play ``move`` on one board and hand anything it captures to the
        partner board, in the mover's colour. A promoted piece goes over as
        a pawn. Raises like :meth:`Board.apply`, in which case neither board
        has changed.
        """
        board_id = BoardId(board_id)
        board = self._boards[board_id]
        if isinstance(move, str):
            move = board.parse_move(move)

        mover = board.turn
        capture = board.capture_at(move)
        was_promoted = False
        if capture is not None:
            _, captured_color, square = capture
            was_promoted = board.promotions.is_marked(captured_color, square)

        board.apply(move)

        if capture is None:
            return
        piece_type = chess.PAWN if was_promoted else capture[0]
        partner = board_id.partner
        self._boards[partner].reserve.add(mover, piece_type)
        log.debug("board %s: %s captured, %s goes to board %s",
                  board_id.value, chess.piece_name(capture[0]), chess.piece_name(piece_type), partner.value)

    def loser(self) -> Optional[Tuple[BoardId, chess.Color]]:
        """The board and colour that have been mated for good, if any."""
        for board_id, board in self._boards.items():
            if board.is_terminal_mate():
                return board_id, board.turn
        return None

    def is_over(self) -> bool:
        return self.loser() is not None

    def state_payload(self) -> dict:
        """Return the game state as a JSON-friendly dict."""
        return {
            "type": "state",
            "boards": {board_id.value: board.state_payload() for board_id, board in self._boards.items()},
            "gameOver": self.is_over(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Game):
            return NotImplemented
        return self._boards == other._boards

    def __repr__(self) -> str:
        return f"Game({self.fen()!r})"
