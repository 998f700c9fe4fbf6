from dataclasses import dataclass

from match3.components.board_phase import BoardPhase


@dataclass(slots=True)
class CascadeState:
    """Resolver bookkeeping shared by the cascade system and its callers."""

    phase: BoardPhase = BoardPhase.IDLE
    cascade_level: int = 0
    multiplier: float = 1.0
    score: int = 0
    turn_score: int = 0
    swaps_accepted: int = 0
    swaps_rejected: int = 0
    shuffles: int = 0
    resets: int = 0

    def reset_turn(self) -> None:
        self.cascade_level = 0
        self.multiplier = 1.0
        self.turn_score = 0
