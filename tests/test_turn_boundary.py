import pytest

from action_economy.utils.turn_boundary import is_stale


def test_marker_not_stale_on_its_own_turn():
    assert not is_stale(2, 3, 2, 3)


@pytest.mark.parametrize("current", [(2, 4), (2, 9), (3, 0), (3, 3), (10, 1)])
def test_marker_stale_after_its_turn(current):
    assert is_stale(2, 3, *current)


def test_round_outranks_turn():
    # A later round with a lower turn index is still later.
    assert is_stale(1, 5, 2, 0)
