"""Tests for the rate-aware batcher."""

import math
from unittest.mock import MagicMock

import pytest

from src.playlistty.batcher import RateAwareBatcher
from src.playlistty.errors import DecodeError, TransportError


@pytest.mark.parametrize(
    "count,batch_size",
    [(0, 25), (1, 25), (24, 25), (25, 25), (26, 25), (100, 100), (150, 100), (251, 100)],
)
def test_window_count_and_sizes(count, batch_size):
    """Test that N ids produce ceil(N/L) windows with the remainder last."""
    ids = [f"id{i}" for i in range(count)]
    send = MagicMock(return_value=None)

    issued = RateAwareBatcher(batch_size).run(ids, send)

    expected = math.ceil(count / batch_size)
    assert issued == expected
    assert send.call_count == expected
    if count:
        last = send.call_args_list[-1].args[0]
        assert len(last) == (count % batch_size or batch_size)


def test_windows_preserve_order():
    """Test that windows are sent in the original order."""
    ids = [f"id{i}" for i in range(7)]
    sent = []

    RateAwareBatcher(3).run(ids, sent.append)

    assert sent == [["id0", "id1", "id2"], ["id3", "id4", "id5"], ["id6"]]


def test_failed_window_does_not_stop_the_rest():
    """Test that a failing window is skipped and not retried."""
    ids = [f"id{i}" for i in range(6)]
    send = MagicMock(side_effect=[None, TransportError("500", 500), None])

    issued = RateAwareBatcher(2).run(ids, send)

    assert issued == 3
    assert send.call_count == 3
    assert send.call_args_list[2].args[0] == ["id4", "id5"]


def test_decode_error_is_logged(caplog):
    """Test that a malformed response on one window is logged."""
    send = MagicMock(side_effect=DecodeError("bad body"))

    RateAwareBatcher(5).run(["a", "b"], send)

    assert "Error on items 1-2: bad body" in caplog.text


def test_unexpected_errors_propagate():
    """Test that programming errors are not swallowed."""
    send = MagicMock(side_effect=KeyError("boom"))

    with pytest.raises(KeyError):
        RateAwareBatcher(5).run(["a"], send)


def test_invalid_batch_size():
    """Test that a non-positive batch size is rejected."""
    with pytest.raises(ValueError):
        RateAwareBatcher(0)


def test_partial_window_failure_is_reported(caplog):
    """Test that a window reporting failed items is logged with the count."""
    send = MagicMock(side_effect=[2, 0])

    issued = RateAwareBatcher(3).run(["a", "b", "c", "d"], send, label="Added")

    assert issued == 2
    assert "Added items 1-3 (2 failed)" in caplog.text
    assert "items 4-4 (" not in caplog.text
