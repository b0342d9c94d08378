import logging
from typing import List, Optional, Tuple

import chess

from bughouse.const import FORBIDDEN_PAWN_DROP_RANKS, HELD_PIECE_TYPES, PROMOTED_MARK
from bughouse.errors import BoardParseError, IllegalMove, InsufficientReserve, MoveParseError
from bughouse.move import Move
from bughouse.position import ChessPosition, Position
from bughouse.promotions import PromotionTracker
from bughouse.reserve import Reserve

log = logging.getLogger(__name__)

# (piece type, colour, square) of a piece about to be captured
Capture = Tuple[chess.PieceType, chess.Color, chess.Square]


class Board:
    """
    One of the two games in a bughouse match: an ordinary chess position
    plus the reserves both players can drop from and the squares holding
    promoted pieces.
    """

    def __init__(self, position: Optional[Position] = None, reserve: Optional[Reserve] = None,
                 promotions: Optional[PromotionTracker] = None) -> None:
        self.position = position if position is not None else ChessPosition()
        self.reserve = reserve if reserve is not None else Reserve()
        self.promotions = promotions if promotions is not None else PromotionTracker()

    @classmethod
    def from_fen(cls, text: str, position_factory=ChessPosition.from_fen) -> "Board":
        """
        Parse one board of a BFEN string, e.g.

            r2k1r2/pbppNppp/1p2p1nb/1P5N/3N4/4Pn1q/PPP1QP1P/2KR2R1/BrpBBqppN w - - 45 56

        The holdings may also follow the placement in brackets
        (``.../2KR2R1[BrpBBqppN]``). A "~" after a piece letter marks a
        promoted piece. Clock fields that aren't numbers fall back to
        "0 1", and anything after them (time controls) is ignored.
        """
        fields = text.split()
        if not fields:
            raise BoardParseError(text, "empty")

        placement = fields[0]
        holdings = ""
        if placement.endswith("]"):
            if "[" not in placement:
                raise BoardParseError(text, "unbalanced holdings brackets")
            placement, holdings = placement[:-1].split("[", 1)
            if placement.count("/") != 7:
                raise BoardParseError(placement, "expected 8 ranks")
        else:
            slashes = placement.count("/")
            if slashes not in (7, 8):
                raise BoardParseError(placement, f"expected 7 or 8 '/', found {slashes}")
            if slashes == 8:
                placement, holdings = placement.rsplit("/", 1)

        reserve = Reserve.from_str(holdings)
        promotions = PromotionTracker.from_board_fen(placement)

        turn, castling, ep = (fields[1:4] + ["w", "-", "-"][len(fields[1:4]):])
        halfmove = fields[4] if len(fields) > 4 and fields[4].isdigit() else "0"
        fullmove = fields[5] if len(fields) > 5 and fields[5].isdigit() and int(fields[5]) > 0 else "1"
        fen = " ".join([placement.replace(PROMOTED_MARK, ""), turn, castling, ep, halfmove, fullmove])
        try:
            position = position_factory(fen)
        except ValueError as e:
            raise BoardParseError(text, str(e)) from e

        for color in chess.COLORS:
            for square in promotions.squares(color):
                if position.color_at(square) != color:
                    raise BoardParseError(text, f"promotion marker on {chess.square_name(square)}")
        return cls(position, reserve, promotions)

    def fen(self) -> str:
        """Render the board in the same BFEN form :meth:`from_fen` reads."""
        placement, rest = self.position.fen().split(" ", 1)
        rows = []
        for row, rank_text in enumerate(placement.split("/")):
            rank = 7 - row
            file = 0
            out = []
            for ch in rank_text:
                out.append(ch)
                if ch.isdigit():
                    file += int(ch)
                    continue
                if self.promotions.is_marked(ch.isupper(), chess.square(file, rank)):
                    out.append(PROMOTED_MARK)
                file += 1
            rows.append("".join(out))
        return f"{'/'.join(rows)}/{self.reserve} {rest}"

    @property
    def turn(self) -> chess.Color:
        return self.position.turn

    # ---- Legality ----

    def _interposition_squares(self) -> List[chess.Square]:
        """Squares a drop could block the current check on."""
        checkers = self.position.checkers()
        # Double check can't be blocked.
        if len(checkers) != 1:
            return []
        checker = checkers[0]
        if self.position.piece_type_at(checker) == chess.KNIGHT:
            return []
        king = self.position.king(self.turn)
        if king is None:
            return []
        return self.position.between(checker, king)

    def blocks_check(self, square: chess.Square) -> bool:
        return square in self._interposition_squares()

    def _drop_problem(self, move: Move) -> Optional[str]:
        if not self.reserve.has_piece(self.turn, move.piece_type):
            return "not in reserve"
        if self.position.piece_type_at(move.dest) is not None:
            return "square is occupied"
        if move.piece_type == chess.PAWN and chess.square_rank(move.dest) in FORBIDDEN_PAWN_DROP_RANKS:
            return "pawns can't be dropped on the first or last rank"
        if self.position.is_check() and not self.blocks_check(move.dest):
            return "doesn't resolve check"
        return None

    def legal_drop(self, move: Move) -> bool:
        return move.is_drop and self._drop_problem(move) is None

    def legal_standard(self, move: Move) -> bool:
        return not move.is_drop and self.position.is_legal(move.to_internal())

    def is_legal(self, move: Move) -> bool:
        if move.is_drop:
            return self.legal_drop(move)
        return self.legal_standard(move)

    def legal_drops(self) -> List[Move]:
        drops = []
        for piece_type in HELD_PIECE_TYPES:
            if not self.reserve.has_piece(self.turn, piece_type):
                continue
            for square in chess.SQUARES:
                move = Move.drop(piece_type, square)
                if self.legal_drop(move):
                    drops.append(move)
        return drops

    def capture_at(self, move: Move) -> Optional[Capture]:
        """What ``move`` would take, looked up before it is made."""
        if move.is_drop:
            return None
        piece_type = self.position.piece_type_at(move.dest)
        if piece_type is not None:
            return piece_type, self.position.color_at(move.dest), move.dest
        if self.position.is_en_passant(move.to_internal()):
            square = chess.square(chess.square_file(move.dest), chess.square_rank(move.source))
            return chess.PAWN, not self.turn, square
        return None

    # ---- Moves ----

    def parse_move(self, text: str) -> Move:
        """Parse a drop, a coordinate move or, failing both, SAN."""
        try:
            return Move.parse(text)
        except MoveParseError as e:
            try:
                return Move.from_chess_move(self.position.parse_san(text.strip()))
            except ValueError:
                raise e from None

    def _move_castled_rook_marker(self, color: chess.Color, move: Move) -> None:
        rank = chess.square_rank(move.source)
        if chess.square_file(move.dest) > chess.square_file(move.source):
            rook_from, rook_to = chess.square(7, rank), chess.square(5, rank)
        else:
            rook_from, rook_to = chess.square(0, rank), chess.square(3, rank)
        if self.promotions.is_marked(color, rook_from):
            self.promotions.unmark(color, rook_from)
            self.promotions.mark(color, rook_to)

    def apply(self, move: Move) -> None:
        """Make ``move`` or raise :class:`IllegalMove` leaving the board as it was."""
        color = self.turn
        if move.is_drop:
            if not self.reserve.has_piece(color, move.piece_type):
                raise InsufficientReserve(color, move.piece_type)
            problem = self._drop_problem(move)
            if problem:
                raise IllegalMove(move, problem)
            try:
                position = self.position.place(move.dest, move.piece_type)
            except ValueError as e:
                raise IllegalMove(move, str(e)) from e
            self.reserve.remove(color, move.piece_type)
            self.position = position
        else:
            if not self.is_legal(move):
                raise IllegalMove(move)
            internal = move.to_internal()
            castling = self.position.is_castling(internal)
            position = self.position.push(internal)
            self.promotions.apply_move(color, move.source, move.dest, move.promotion is not None)
            if castling:
                self._move_castled_rook_marker(color, move)
            self.position = position
        log.debug("%s played %s", chess.COLOR_NAMES[color], move)

    # ---- Status ----

    def is_check(self) -> bool:
        return self.position.is_check()

    def is_terminal_mate(self) -> bool:
        """
        Checkmate that a drop can't get out of.

        The engine knows nothing of drops, so a mate it reports is only final
        when there is no square to interpose on: a double check, a knight
        check or a contact check. Whether the mated side actually holds a
        piece to drop there is not considered.
        """
        if not self.position.is_checkmate():
            return False
        blockable = self._interposition_squares()
        if blockable:
            log.debug("mate on the board but %s can be blocked", chess.square_name(blockable[0]))
        return not blockable

    def state_payload(self) -> dict:
        """Return the board state as a JSON-friendly dict."""
        return {
            "fen": self.fen(),
            "turn": "white" if self.turn else "black",
            "reserve": self.reserve.as_dict(),
            "promoted": {
                chess.COLOR_NAMES[color]: sorted(chess.square_name(sq) for sq in self.promotions.squares(color))
                for color in chess.COLORS
            },
            "inCheck": self.is_check(),
            "mated": self.is_terminal_mate(),
        }

    def copy(self) -> "Board":
        return Board(self.position, self.reserve.copy(), self.promotions.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.position == other.position
                and self.reserve == other.reserve
                and self.promotions == other.promotions)

    def __str__(self) -> str:
        return self.fen()

    def __repr__(self) -> str:
        return f"Board({self.fen()!r})"
