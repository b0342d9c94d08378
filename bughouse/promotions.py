import chess

from bughouse.const import PROMOTED_MARK


class PromotionTracker:
    """
    Squares holding a piece that started life as a pawn, per colour.

    A captured promoted piece goes back into play as a pawn, so the marker
    has to follow the piece around the board until it is taken.
    """

    def __init__(self) -> None:
        self._squares: dict[chess.Color, set[chess.Square]] = {
            chess.WHITE: set(),
            chess.BLACK: set(),
        }

    @classmethod
    def from_board_fen(cls, placement: str) -> "PromotionTracker":
        """Read "~" markers out of the rank-by-rank field of a BFEN."""
        tracker = cls()
        for row, rank_text in enumerate(placement.split("/")[:8]):
            rank = 7 - row
            file = 0
            last_color = chess.WHITE
            for ch in rank_text:
                if ch.isdigit():
                    file += int(ch)
                elif ch == PROMOTED_MARK:
                    if file == 0:
                        continue
                    tracker.mark(last_color, chess.square(file - 1, rank))
                elif ch.isalpha():
                    last_color = ch.isupper()
                    file += 1
        return tracker

    def is_marked(self, color: chess.Color, square: chess.Square) -> bool:
        return square in self._squares[color]

    def mark(self, color: chess.Color, square: chess.Square) -> None:
        self._squares[color].add(square)

    def unmark(self, color: chess.Color, square: chess.Square) -> None:
        self._squares[color].discard(square)

    def squares(self, color: chess.Color) -> frozenset:
        return frozenset(self._squares[color])

    def apply_move(self, mover: chess.Color, source: chess.Square, dest: chess.Square,
                   is_promotion: bool) -> None:
        # Must run against the occupancy before the move is made.
        if is_promotion:
            self.mark(mover, dest)
        elif self.is_marked(mover, source):
            self.unmark(mover, source)
            self.mark(mover, dest)
        # Whatever stood on dest has been captured.
        self.unmark(not mover, dest)

    def copy(self) -> "PromotionTracker":
        other = PromotionTracker()
        for color in chess.COLORS:
            other._squares[color] = set(self._squares[color])
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PromotionTracker):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        names = {
            chess.COLOR_NAMES[color]: sorted(chess.square_name(sq) for sq in squares)
            for color, squares in self._squares.items()
        }
        return f"PromotionTracker({names})"
