"""
The chess engine a bughouse board sits on.

Bughouse only layers reserves, drops and promotion bookkeeping on top of
ordinary chess, so everything else (attacks, checks, legality of normal
moves) is asked of a :class:`Position`. :class:`ChessPosition` answers
those questions with python-chess.
"""
from __future__ import annotations

from typing import List, Optional, Protocol

import chess

from bughouse.const import TOLERATED_STATUS


class Position(Protocol):
    @property
    def turn(self) -> chess.Color: ...

    def piece_type_at(self, square: chess.Square) -> Optional[chess.PieceType]: ...

    def color_at(self, square: chess.Square) -> Optional[chess.Color]: ...

    def is_check(self) -> bool: ...

    def checkers(self) -> List[chess.Square]: ...

    def is_checkmate(self) -> bool: ...

    def is_legal(self, move: chess.Move) -> bool: ...

    def is_en_passant(self, move: chess.Move) -> bool: ...

    def is_castling(self, move: chess.Move) -> bool: ...

    def push(self, move: chess.Move) -> Position: ...

    def place(self, square: chess.Square, piece_type: chess.PieceType) -> Position: ...

    def between(self, a: chess.Square, b: chess.Square) -> List[chess.Square]: ...

    def king(self, color: chess.Color) -> Optional[chess.Square]: ...

    def parse_san(self, san: str) -> chess.Move: ...

    def fen(self) -> str: ...


class ChessPosition:
    """A :class:`Position` backed by a private ``chess.Board``.

    Positions are values: ``push`` and ``place`` return a new instance and
    never touch the one they are called on. The wrapped board is owned by
    the position and must not be changed from outside.
    """

    def __init__(self, board: Optional[chess.Board] = None) -> None:
        self._board = board if board is not None else chess.Board()

    @classmethod
    def from_fen(cls, fen: str) -> ChessPosition:
        return cls(chess.Board(fen))

    @property
    def turn(self) -> chess.Color:
        return self._board.turn

    def piece_type_at(self, square: chess.Square) -> Optional[chess.PieceType]:
        return self._board.piece_type_at(square)

    def color_at(self, square: chess.Square) -> Optional[chess.Color]:
        return self._board.color_at(square)

    def is_check(self) -> bool:
        return self._board.is_check()

    def checkers(self) -> List[chess.Square]:
        return list(self._board.checkers())

    def is_checkmate(self) -> bool:
        return self._board.is_checkmate()

    def is_legal(self, move: chess.Move) -> bool:
        return self._board.is_legal(move)

    def is_en_passant(self, move: chess.Move) -> bool:
        return self._board.is_en_passant(move)

    def is_castling(self, move: chess.Move) -> bool:
        return self._board.is_castling(move)

    def push(self, move: chess.Move) -> ChessPosition:
        board = self._board.copy(stack=False)
        board.push(move)
        return ChessPosition(board)

    def place(self, square: chess.Square, piece_type: chess.PieceType) -> ChessPosition:
        """
        Put a piece of the side to move on an empty square and pass the turn,
        the way a drop does. Raises ``ValueError`` if python-chess would not
        accept the resulting position.
        """
        if self._board.piece_at(square) is not None:
            raise ValueError(f"{chess.square_name(square)} is occupied")

        board = self._board.copy(stack=False)
        board.set_piece_at(square, chess.Piece(piece_type, board.turn))
        board.ep_square = None
        if piece_type == chess.PAWN:
            board.halfmove_clock = 0
        else:
            board.halfmove_clock += 1
        if board.turn == chess.BLACK:
            board.fullmove_number += 1
        board.turn = not board.turn

        introduced = board.status() & ~self._board.status() & ~TOLERATED_STATUS
        if introduced:
            raise ValueError(f"drop leaves an invalid position ({introduced!r})")
        return ChessPosition(board)

    def between(self, a: chess.Square, b: chess.Square) -> List[chess.Square]:
        return list(chess.SquareSet(chess.between(a, b)))

    def king(self, color: chess.Color) -> Optional[chess.Square]:
        return self._board.king(color)

    def parse_san(self, san: str) -> chess.Move:
        return self._board.parse_san(san)

    def fen(self) -> str:
        return self._board.fen()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChessPosition):
            return NotImplemented
        return self._board == other._board

    def __repr__(self) -> str:
        return f"ChessPosition({self.fen()!r})"
