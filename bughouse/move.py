from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

import chess

from bughouse.const import DROP_MARK, HELD_PIECE_TYPES
from bughouse.errors import MoveParseError

DROP_RE = re.compile(r"^([pnbrqPNBRQ])@([a-hA-H][1-8])$")


@dataclass(frozen=True)
class Move:
    """
    A bughouse move: either an ordinary move from ``source`` to ``dest``
    or a drop of ``piece_type`` from the reserve onto ``dest``.
    """
    dest: chess.Square
    source: Optional[chess.Square] = None
    piece_type: Optional[chess.PieceType] = None
    promotion: Optional[chess.PieceType] = None

    def __post_init__(self) -> None:
        if self.source is None:
            if self.piece_type not in HELD_PIECE_TYPES:
                raise ValueError("a drop needs a pawn, knight, bishop, rook or queen")
            if self.promotion is not None:
                raise ValueError("a drop can't promote")
        elif self.piece_type is not None:
            raise ValueError("only drops carry a piece type")

    @classmethod
    def drop(cls, piece_type: chess.PieceType, dest: chess.Square) -> Move:
        return cls(dest=dest, piece_type=piece_type)

    @classmethod
    def standard(cls, source: chess.Square, dest: chess.Square,
                 promotion: Optional[chess.PieceType] = None) -> Move:
        return cls(dest=dest, source=source, promotion=promotion)

    @classmethod
    def from_chess_move(cls, move: chess.Move) -> Move:
        return cls.standard(move.from_square, move.to_square, move.promotion)

    @classmethod
    def parse(cls, text: str) -> Move:
        """
        Parse a drop ("N@e4", any letter case) or a coordinate move
        ("e2e4", "e7e8q").
        """
        text = text.strip()
        if DROP_MARK in text:
            m = DROP_RE.match(text)
            if not m:
                raise MoveParseError(text)
            piece_type = chess.PIECE_SYMBOLS.index(m.group(1).lower())
            return cls.drop(piece_type, chess.parse_square(m.group(2).lower()))

        try:
            move = chess.Move.from_uci(text.lower())
        except ValueError:
            raise MoveParseError(text) from None
        if not move:
            raise MoveParseError(text, "null move")
        if move.promotion in (chess.PAWN, chess.KING):
            raise MoveParseError(text, "bad promotion piece")
        return cls.from_chess_move(move)

    @property
    def is_drop(self) -> bool:
        return self.source is None

    def to_internal(self) -> chess.Move:
        if self.is_drop:
            raise ValueError(f"{self} is a drop and has no chess.Move form")
        return chess.Move(self.source, self.dest, self.promotion)

    def __str__(self) -> str:
        if self.is_drop:
            return f"{chess.piece_symbol(self.piece_type).upper()}{DROP_MARK}{chess.square_name(self.dest)}"
        return self.to_internal().uci()
