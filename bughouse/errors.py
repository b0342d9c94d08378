import chess


class BughouseError(ValueError):
    """Base class for everything this package raises."""


class ParseError(BughouseError):
    what = "Can't parse"

    def __init__(self, text: str, reason: str | None = None) -> None:
        self.text = text
        message = f"{self.what}: {text!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class MoveParseError(ParseError):
    what = "Can't parse move"


class ReserveParseError(ParseError):
    what = "Invalid holdings"


class BoardParseError(ParseError):
    what = "Invalid board BFEN"


class GameParseError(ParseError):
    what = "Invalid game BFEN"


class IllegalMove(BughouseError):
    def __init__(self, move, reason: str | None = None) -> None:
        self.move = move
        message = f"Illegal move: {move}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class InsufficientReserve(IllegalMove):
    """Raised when dropping a piece the player doesn't hold."""

    def __init__(self, color: chess.Color, piece_type: chess.PieceType) -> None:
        self.color = color
        self.piece_type = piece_type
        super().__init__(
            f"{chess.piece_symbol(piece_type).upper()}@",
            f"{chess.COLOR_NAMES[color]} holds no {chess.piece_name(piece_type)}",
        )
