from blinker import Signal
from typing import Dict

class EventBus:
    """Named blinker signals; handlers receive ``(sender, **payload)``."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems that are not stored anywhere keep receiving events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                  # payload: dt=float


# ============================================================================
# INPUT
# ============================================================================
EVENT_CURSOR_MOVE_REQUEST = "cursor_move_request"    # payload: owner_entity=int, dx=int, dy=int
EVENT_CURSOR_HOLD_START = "cursor_hold_start"        # payload: owner_entity=int, dx=int, dy=int
EVENT_CURSOR_HOLD_END = "cursor_hold_end"            # payload: owner_entity=int
EVENT_SWAP_REQUEST = "swap_request"                  # payload: owner_entity=int
EVENT_RESTART_REQUEST = "restart_request"            # payload: None
EVENT_PAUSE_TOGGLE_REQUEST = "pause_toggle_request"  # payload: None


# ============================================================================
# BOARD
# ============================================================================
EVENT_CURSOR_MOVED = "cursor_moved"                  # payload: owner_entity=int, x=int, y=int
EVENT_SWAP_APPLIED = "swap_applied"                  # payload: owner_entity=int, cmd=SwapCmd
EVENT_SWAP_REJECTED = "swap_rejected"                # payload: owner_entity=int, cmd=SwapCmd
EVENT_CLEAR_SCHEDULED = "clear_scheduled"            # payload: owner_entity=int
EVENT_BLOCKS_CLEARED = "blocks_cleared"              # payload: owner_entity=int, cleared=int, groups=int, chain_index=int, cracked=int, points=int, garbage=int
EVENT_CHAIN_ENDED = "chain_ended"                    # payload: owner_entity=int, length=int, outgoing=int, converted=int
EVENT_ROW_PUSHED = "row_pushed"                      # payload: owner_entity=int, interval=float


# ============================================================================
# GARBAGE
# ============================================================================
EVENT_GARBAGE_SENT = "garbage_sent"                  # payload: source_owner=int, target_entity=int, amount=int
EVENT_GARBAGE_CANCELLED = "garbage_cancelled"        # payload: amount=int
EVENT_GARBAGE_DROPPED = "garbage_dropped"            # payload: owner_entity=int, amount=int, rows=int
EVENT_GARBAGE_DEFERRED = "garbage_deferred"          # payload: owner_entity=int, amount=int


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"        # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_MATCH_STARTED = "match_started"                # payload: players=int
EVENT_PLAYER_TOPPED_OUT = "player_topped_out"        # payload: owner_entity=int, slot=int
EVENT_MATCH_FINISHED = "match_finished"              # payload: winner=int|None, loser=int
