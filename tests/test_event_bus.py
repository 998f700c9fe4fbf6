from match3.board import request_swap
from match3.components.trace import SwapRejectReason
from match3.events.bus import (
    EVENT_CASCADE_TRACE,
    EVENT_DESTROYED,
    EVENT_FELL,
    EVENT_MATCHES_FOUND,
    EVENT_REFILLED,
    EVENT_SETTLED,
    EVENT_SWAP_COMMITTED,
    EVENT_SWAP_REJECTED,
    EVENT_SWAP_REQUEST,
    EventBus,
)
from tests.helpers import build_board, striped_rows

ALL_EVENTS = [
    EVENT_SWAP_REJECTED,
    EVENT_SWAP_COMMITTED,
    EVENT_MATCHES_FOUND,
    EVENT_DESTROYED,
    EVENT_FELL,
    EVENT_REFILLED,
    EVENT_SETTLED,
    EVENT_CASCADE_TRACE,
]


def _board():
    overrides = {(0, 0): 'A', (0, 1): 'A', (1, 1): 'A', (2, 0): 'A'}
    return build_board(striped_rows(8, 8, "BCDE", overrides, step=2), palette="ABCDE", seed=1)


def _record(bus):
    received = []
    for name in ALL_EVENTS:
        bus.subscribe(name, lambda sender, _name=name, **payload: received.append((_name, payload)))
    return received


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    calls = []

    def handler(sender, **kwargs):
        calls.append(kwargs)

    bus.subscribe("test", handler)
    bus.unsubscribe("test", handler)
    bus.emit("test", value=1)
    bus.unsubscribe("never_subscribed", handler)
    assert calls == []


def test_trace_is_replayed_in_order_after_settling():
    board = _board()
    received = _record(board.event_bus)
    grid_during_replay = []
    board.event_bus.subscribe(
        EVENT_SWAP_COMMITTED, lambda sender, **payload: grid_during_replay.append(board.grid.freeze())
    )

    result = request_swap(board, (1, 0), (1, 1))

    names = [name for name, _ in received]
    assert names == result.trace.events() + [EVENT_CASCADE_TRACE]
    committed = received[0][1]
    assert committed == {'a': (1, 0), 'b': (1, 1)}
    final = received[-1][1]
    assert final['trace'] is result.trace
    assert final['accepted'] is True
    assert final['reason'] is None
    # Subscribers only ever see the settled board.
    assert grid_during_replay == [board.grid.freeze()]


def test_rejection_is_replayed_with_its_reason():
    board = _board()
    received = _record(board.event_bus)
    request_swap(board, (0, 0), (5, 5))
    assert received[0][0] == EVENT_SWAP_REJECTED
    assert received[0][1]['reason'] is SwapRejectReason.NOT_ADJACENT
    assert received[-1][1]['accepted'] is False


def test_swap_request_event_drives_the_board():
    board = _board()
    results = []
    board.event_bus.subscribe(EVENT_CASCADE_TRACE, lambda sender, **payload: results.append(payload))
    board.event_bus.emit(EVENT_SWAP_REQUEST, src=(1, 0), dst=(1, 1))
    assert len(results) == 1
    assert results[0]['accepted'] is True
    assert board.state.swaps_accepted == 1


def test_reentrant_request_during_replay_is_busy():
    board = _board()
    nested = []

    def on_settled(sender, **payload):
        nested.append(board.cascade.request_swap((3, 3), (3, 4)))

    board.event_bus.subscribe(EVENT_SETTLED, on_settled)
    request_swap(board, (1, 0), (1, 1))

    assert len(nested) == 1
    assert not nested[0].accepted
    assert nested[0].reason is SwapRejectReason.BUSY
    # Once replay is over the board takes requests again.
    board.event_bus.unsubscribe(EVENT_SETTLED, on_settled)
    assert request_swap(board, (3, 3), (3, 4)).reason is not SwapRejectReason.BUSY
