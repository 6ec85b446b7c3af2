from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so handlers defined inline (lambdas, closures) stay connected.
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
# INPUT (presentation -> session)
# ============================================================================
EVENT_CELL_SELECT_REQUEST = "cell_select_request"        # payload: x, y
EVENT_ROTATION_REQUEST = "rotation_request"              # payload: clockwise=bool
EVENT_AUTO_RESOLVE_REQUEST = "auto_resolve_request"      # payload: None
EVENT_SESSION_RESTART_REQUEST = "session_restart_request"  # payload: None


# ============================================================================
# SELECTION & ROTATION
# ============================================================================
EVENT_SELECTION_CHANGED = "selection_changed"    # payload: selection=list[(x,y)]|None
EVENT_ROTATION_ACCEPTED = "rotation_accepted"    # payload: selection, clockwise, pass_index, path=list[list[(x,y)]]
EVENT_ROTATION_REJECTED = "rotation_rejected"    # payload: selection, clockwise, path=list[list[(x,y)]]


# ============================================================================
# RESOLUTION
# ============================================================================
EVENT_CELLS_EXPLODED = "cells_exploded"          # payload: outcome=ExplodeOutcome, depth=int
EVENT_FILL_COMPLETED = "fill_completed"          # payload: outcome=FillOutcome, depth=int
EVENT_CASCADE_COMPLETE = "cascade_complete"      # payload: depth=int


# ============================================================================
# SCORE, HAZARDS & GAME FLOW
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"            # payload: score=int, delta=int
EVENT_BOMBS_UPDATED = "bombs_updated"            # payload: bombs=list[BombElement], exploded=bool
EVENT_GAME_OVER = "game_over"                    # payload: reason=str, score=int
EVENT_SESSION_STARTED = "session_started"        # payload: width=int, height=int, score=int
