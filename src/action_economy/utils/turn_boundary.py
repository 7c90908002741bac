def is_stale(marker_round: int, marker_turn: int, current_round: int, current_turn: int) -> bool:
    """Return True when a marker created at (marker_round, marker_turn) precedes the current turn.

    Ordering is round-major, turn-minor. A marker created on the current turn is not stale.
    """
    if marker_round < current_round:
        return True
    return marker_round == current_round and marker_turn < current_turn
