import pytest
from unittest.mock import MagicMock
from databinding.core.events import Signal


def test_signal_event():
    """Verify Signal connect/emit/disconnect behavior."""
    sig = Signal("test_signal")
    mock_handler = MagicMock()

    sig.connect(mock_handler)
    sig.emit("data", 123)

    mock_handler.assert_called_once_with("data", 123)

    sig.disconnect(mock_handler)
    sig.emit("data2")
    assert mock_handler.call_count == 1


def test_connect_returns_disconnect():
    sig = Signal("test_signal")
    results = []

    disconnect = sig.connect(results.append)
    sig.emit(1)
    disconnect()
    sig.emit(2)

    assert results == [1]
    assert sig.subscriber_count == 0


def test_connect_same_callback_once():
    sig = Signal("test_signal")
    handler = MagicMock()

    sig.connect(handler)
    sig.connect(handler)
    sig.emit()

    assert handler.call_count == 1
    assert sig.subscriber_count == 1


def test_each_connect_has_its_own_handle():
    """Releasing one of two handles for the same callback keeps it connected."""
    sig = Signal("shared")
    handler = MagicMock()

    first = sig.connect(handler)
    second = sig.connect(handler)

    first()
    first()  # releasing twice counts once
    sig.emit("still")
    second()
    sig.emit("gone")

    handler.assert_called_once_with("still")
    assert sig.subscriber_count == 0


def test_disconnect_ignores_handle_count():
    sig = Signal("forced")
    handler = MagicMock()
    sig.connect(handler)
    sig.connect(handler)

    sig.disconnect(handler)
    sig.emit()

    handler.assert_not_called()
    assert sig.subscriber_count == 0


def test_subscriber_error_propagates():
    """Errors reach the emitter instead of being swallowed."""
    sig = Signal("err_evt")
    results = []

    def buggy_callback():
        raise ValueError("Bug")

    sig.connect(buggy_callback)
    sig.connect(lambda: results.append("late"))

    with pytest.raises(ValueError, match="Bug"):
        sig.emit()
    assert results == []


def test_disconnect_during_emit():
    """A subscriber may disconnect itself while being notified."""
    sig = Signal("self_removing")
    calls = []

    def once():
        calls.append("once")
        sig.disconnect(once)

    sig.connect(once)
    sig.connect(lambda: calls.append("other"))

    sig.emit()
    sig.emit()

    assert calls == ["once", "other", "other"]


def test_disconnect_unknown_callback_is_noop():
    sig = Signal("test_signal")
    sig.disconnect(lambda: None)
    assert sig.subscriber_count == 0
