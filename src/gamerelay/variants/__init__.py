"""Game variants, keyed by their wire ``gameType``."""

from __future__ import annotations

from enum import Enum

from gamerelay.variants.base import Variant
from gamerelay.variants.battleship.engine import BattleshipVariant
from gamerelay.variants.checkers.engine import CheckersVariant
from gamerelay.variants.connectfour.engine import ConnectFourVariant
from gamerelay.variants.dotsandboxes.engine import DotsAndBoxesVariant
from gamerelay.variants.memory.engine import MemoryVariant
from gamerelay.variants.rps.engine import RockPaperScissorsVariant
from gamerelay.variants.tictactoe.engine import TicTacToeVariant


class VariantKind(Enum):
    TICTACTOE = "tictactoe"
    CONNECTFOUR = "connectfour"
    CHECKERS = "checkers"
    BATTLESHIP = "battleship"
    RPS = "rps"
    MEMORY = "memory"
    DOTSANDBOXES = "dotsandboxes"


def build_variants(dots_grid_size: int = 4) -> dict[VariantKind, Variant]:
    """Instantiate one rules object per variant kind."""
    return {
        VariantKind.TICTACTOE: TicTacToeVariant(),
        VariantKind.CONNECTFOUR: ConnectFourVariant(),
        VariantKind.CHECKERS: CheckersVariant(),
        VariantKind.BATTLESHIP: BattleshipVariant(),
        VariantKind.RPS: RockPaperScissorsVariant(),
        VariantKind.MEMORY: MemoryVariant(),
        VariantKind.DOTSANDBOXES: DotsAndBoxesVariant(size=dots_grid_size),
    }
