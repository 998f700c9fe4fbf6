from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so handlers defined inline (lambdas, closures in tests) stay connected.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT
# ============================================================================
EVENT_SWAP_REQUEST = "swap_request"                # payload: src=(x,y), dst=(x,y)


# ============================================================================
# CASCADE TRACE REPLAY (emitted after a request has fully settled)
# ============================================================================
EVENT_SWAP_REJECTED = "swap_rejected"              # payload: a, b, reason=SwapRejectReason, reverted=bool
EVENT_SWAP_COMMITTED = "swap_committed"            # payload: a, b
EVENT_MATCHES_FOUND = "matches_found"              # payload: matches=tuple[Match], cascade_level=int
EVENT_DESTROYED = "destroyed"                      # payload: positions, cascade_level=int, points=int, multiplier=float
EVENT_FELL = "fell"                                # payload: moves=tuple[MoveStep]
EVENT_REFILLED = "refilled"                        # payload: new_cells=tuple[MoveStep]
EVENT_SETTLED = "settled"                          # payload: cascade_level, turn_score, total_score, moves_available
EVENT_DEADLOCKED = "deadlocked"                    # payload: attempt=int
EVENT_SHUFFLED = "shuffled"                        # payload: summary=ShuffleSummary
EVENT_BOARD_RESET = "board_reset"                  # payload: new_cells=tuple[(x,y)], reason=str
EVENT_CASCADE_TRACE = "cascade_trace"              # payload: trace=CascadeTrace, accepted=bool, reason=SwapRejectReason|None
