"""
Unit Tests for Accessor Resolution.

Tests for:
- Property paths (plain, dotted, read-only, Qt-style getter/setter pairs)
- Indexed reads and writes
- Control event resolution
- Model change-notification detection
"""
import pytest
from unittest.mock import MagicMock

from databinding.core.errors import BindingResolutionError
from databinding.core.events import Signal
from databinding.mvvm.accessors import (
    read_indexed,
    resolve_event,
    resolve_property,
    subscribe_property_changed,
    supports_change_notification,
    write_indexed,
)


class Settings:
    def __init__(self):
        self.theme = "dark"


class Owner:
    def __init__(self):
        self.name = "x"
        self.settings = Settings()

    @property
    def label(self):
        return f"<{self.name}>"


class QtLikeWidget:
    """Mimics a widget exposing text()/setText() and isChecked()/setChecked()."""

    def __init__(self):
        self._text = ""
        self._checked = False

    def text(self):
        return self._text

    def setText(self, value):
        self._text = value

    def isChecked(self):
        return self._checked

    def setChecked(self, value):
        self._checked = value


class TestResolveProperty:

    def test_plain_attribute(self):
        owner = Owner()
        accessor = resolve_property(owner, "name")

        accessor.set("y")

        assert accessor.get() == "y"
        assert owner.name == "y"

    def test_missing_property(self):
        with pytest.raises(BindingResolutionError, match="nope"):
            resolve_property(Owner(), "nope")

    def test_dotted_path_follows_replacement(self):
        owner = Owner()
        accessor = resolve_property(owner, "settings.theme")
        assert accessor.name == "settings"

        owner.settings = Settings()
        accessor.set("light")

        assert owner.settings.theme == "light"

    def test_dotted_path_missing_segment(self):
        with pytest.raises(BindingResolutionError):
            resolve_property(Owner(), "settings.font")
        with pytest.raises(BindingResolutionError):
            resolve_property(Owner(), "prefs.theme")

    def test_read_only_property(self):
        owner = Owner()
        assert resolve_property(owner, "label").get() == "<x>"

        with pytest.raises(BindingResolutionError, match="read-only"):
            resolve_property(owner, "label", writable=True)

    def test_qt_style_pairs(self):
        widget = QtLikeWidget()

        text = resolve_property(widget, "text")
        text.set("hello")
        assert widget.text() == "hello"
        assert text.get() == "hello"

        checked = resolve_property(widget, "checked")
        checked.set(True)
        assert widget.isChecked() is True
        assert checked.get() is True


class TestIndexedAccess:

    def test_read_without_index(self):
        assert read_indexed([1, 2], None) == [1, 2]

    def test_read_single_and_multi_index(self):
        assert read_indexed([10, 20, 30], (2,)) == 30
        assert read_indexed({("r", 1): "cell"}, ("r", 1)) == "cell"

    def test_write(self):
        cells = ["a", "b", "c"]
        write_indexed(cells, (1,), "B")
        assert cells == ["a", "B", "c"]

    def test_not_indexable(self):
        with pytest.raises(BindingResolutionError):
            read_indexed(42, (0,), "count")
        with pytest.raises(BindingResolutionError):
            write_indexed("immutable", (0,), "x", "name")

    def test_index_out_of_range(self):
        with pytest.raises(BindingResolutionError):
            read_indexed([1], (5,), "items")
        with pytest.raises(BindingResolutionError):
            write_indexed([1], (5,), 0, "items")


class TestResolveEvent:

    def test_signal_attribute(self, control):
        handler = MagicMock()
        event = resolve_event(control, "Change")

        unsubscribe = event.subscribe(handler)
        control.fire("Change", "payload")
        unsubscribe()
        control.fire("Change")

        handler.assert_called_once_with("payload")
        assert control.Change.subscriber_count == 0

    def test_missing_event(self, control):
        with pytest.raises(BindingResolutionError):
            resolve_event(control, "Nope")

    def test_non_signal_attribute(self, control):
        with pytest.raises(BindingResolutionError):
            resolve_event(control, "Text")

    def test_named_subscribe_interface(self):
        class EventSource:
            def __init__(self):
                self.events = {"Change": Signal("Change")}

            def has_event(self, name):
                return name in self.events

            def subscribe(self, name, handler):
                return self.events[name].connect(handler)

        source = EventSource()
        handler = MagicMock()

        unsubscribe = resolve_event(source, "Change").subscribe(handler)
        source.events["Change"].emit()
        unsubscribe()
        source.events["Change"].emit()

        assert handler.call_count == 1
        with pytest.raises(BindingResolutionError):
            resolve_event(source, "Other")

    def test_named_subscribe_without_has_event(self):
        class EventSource:
            def __init__(self):
                self.events = {"Change": Signal("Change")}

            def subscribe(self, name, handler):
                return self.events[name].connect(handler)

        source = EventSource()

        with pytest.raises(BindingResolutionError, match="Other"):
            resolve_event(source, "Other")

        event = resolve_event(source, "Change")
        assert source.events["Change"].subscriber_count == 0

        handler = MagicMock()
        event.subscribe(handler)
        source.events["Change"].emit()
        handler.assert_called_once_with()


class TestChangeNotification:

    def test_bindable_model(self, model):
        assert supports_change_notification(model)

        names = []
        unsubscribe = subscribe_property_changed(model, names.append)
        model.count = 1
        unsubscribe()
        model.count = 2

        assert names == ["count"]

    def test_property_changed_signal_model(self):
        class SignalModel:
            def __init__(self):
                self.propertyChanged = Signal("propertyChanged")

        m = SignalModel()
        assert supports_change_notification(m)

        names = []
        unsubscribe = subscribe_property_changed(m, names.append)
        m.propertyChanged.emit("value", 1)
        unsubscribe()
        m.propertyChanged.emit("value", 2)

        assert names == ["value"]
        assert m.propertyChanged.subscriber_count == 0

    def test_plain_object(self):
        assert not supports_change_notification(Owner())
        assert not supports_change_notification(None)
