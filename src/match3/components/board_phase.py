"""Resolver phases for a board."""
from enum import Enum, auto


class BoardPhase(Enum):
    """Steps of the cascade state machine.

    IDLE and DEADLOCKED are the quiescent phases; a swap request is only
    accepted while the board sits in one of them.
    """
    IDLE = auto()
    SWAPPING = auto()
    MATCHING = auto()
    DESTROYING = auto()
    FALLING = auto()
    REFILLING = auto()
    DEADLOCKED = auto()
    SHUFFLING = auto()

    @property
    def quiescent(self) -> bool:
        return self in (BoardPhase.IDLE, BoardPhase.DEADLOCKED)
