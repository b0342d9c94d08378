import logging

import chess

from bughouse.const import HELD_PIECE_TYPES
from bughouse.errors import InsufficientReserve, ReserveParseError

log = logging.getLogger(__name__)


def _check_held(piece_type: chess.PieceType) -> None:
    if piece_type not in HELD_PIECE_TYPES:
        raise ValueError(f"{chess.piece_name(piece_type)} can't be held in reserve")


class Reserve:
    """Pieces each colour has in hand, ready to be dropped."""

    def __init__(self) -> None:
        self._counts: dict[chess.Color, dict[chess.PieceType, int]] = {
            chess.WHITE: dict.fromkeys(HELD_PIECE_TYPES, 0),
            chess.BLACK: dict.fromkeys(HELD_PIECE_TYPES, 0),
        }

    @classmethod
    def from_str(cls, value: str) -> "Reserve":
        """
        Build a reserve from a BFEN holdings field, one letter per piece:
        uppercase for White, lowercase for Black. "" means empty.
        """
        reserve = cls()
        for symbol in value.strip():
            try:
                piece = chess.Piece.from_symbol(symbol)
            except ValueError:
                raise ReserveParseError(value, f"unknown piece {symbol!r}") from None
            if piece.piece_type not in HELD_PIECE_TYPES:
                raise ReserveParseError(value, f"{piece.symbol()} can't be held")
            reserve._counts[piece.color][piece.piece_type] += 1
        return reserve

    def count(self, color: chess.Color, piece_type: chess.PieceType) -> int:
        return self._counts[color].get(piece_type, 0)

    def has_piece(self, color: chess.Color, piece_type: chess.PieceType) -> bool:
        return self.count(color, piece_type) > 0

    def remove(self, color: chess.Color, piece_type: chess.PieceType) -> None:
        if not self.has_piece(color, piece_type):
            raise InsufficientReserve(color, piece_type)
        self._counts[color][piece_type] -= 1

    def add(self, color: chess.Color, piece_type: chess.PieceType) -> None:
        _check_held(piece_type)
        self._counts[color][piece_type] += 1
        log.debug("%s reserve gains a %s", chess.COLOR_NAMES[color], chess.piece_name(piece_type))

    def copy(self) -> "Reserve":
        other = Reserve()
        for color in chess.COLORS:
            other._counts[color].update(self._counts[color])
        return other

    def as_dict(self) -> dict:
        """Return the reserve as a JSON-friendly dict."""
        return {
            chess.COLOR_NAMES[color]: {
                chess.piece_name(pt): n for pt, n in self._counts[color].items() if n
            }
            for color in chess.COLORS
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Reserve):
            return NotImplemented
        return self._counts == other._counts

    def __str__(self) -> str:
        parts = []
        for color in (chess.WHITE, chess.BLACK):
            for piece_type in HELD_PIECE_TYPES:
                symbol = chess.piece_symbol(piece_type)
                if color == chess.WHITE:
                    symbol = symbol.upper()
                parts.append(symbol * self._counts[color][piece_type])
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Reserve({str(self)!r})"
