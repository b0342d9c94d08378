from bughouse.board import Board
from bughouse.errors import (
    BoardParseError,
    BughouseError,
    GameParseError,
    IllegalMove,
    InsufficientReserve,
    MoveParseError,
    ParseError,
    ReserveParseError,
)
from bughouse.game import BoardId, Game
from bughouse.move import Move
from bughouse.position import ChessPosition, Position
from bughouse.promotions import PromotionTracker
from bughouse.reserve import Reserve

__all__ = [
    "Board",
    "BoardId",
    "BoardParseError",
    "BughouseError",
    "ChessPosition",
    "Game",
    "GameParseError",
    "IllegalMove",
    "InsufficientReserve",
    "Move",
    "MoveParseError",
    "ParseError",
    "Position",
    "PromotionTracker",
    "Reserve",
    "ReserveParseError",
]
