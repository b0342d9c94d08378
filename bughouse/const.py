import chess

# ---- Notation ----
STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR/ w KQkq - 0 1"
GAME_SEPARATOR = " | "
PROMOTED_MARK = "~"
DROP_MARK = "@"

# ---- Rules ----
# Pieces that can sit in a reserve, in the order holdings are rendered.
HELD_PIECE_TYPES = (chess.QUEEN, chess.ROOK, chess.BISHOP, chess.KNIGHT, chess.PAWN)

# Pawns may not be dropped on the first or last rank.
FORBIDDEN_PAWN_DROP_RANKS = (0, 7)

# Drops can put more than 8 pawns or 16 pieces of one colour on the board.
TOLERATED_STATUS = (
    chess.STATUS_TOO_MANY_WHITE_PAWNS
    | chess.STATUS_TOO_MANY_BLACK_PAWNS
    | chess.STATUS_TOO_MANY_WHITE_PIECES
    | chess.STATUS_TOO_MANY_BLACK_PIECES
)
