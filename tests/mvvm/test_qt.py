"""
Unit Tests for the PySide6 Bridge.

Tests for:
- QtBindableBase change notification
- Binding real widgets through Qt property pairs and signals
- widget_binding() event defaults
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from unittest.mock import MagicMock
from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QApplication, QCheckBox, QLabel, QLineEdit, QSpinBox, QWidget

from databinding.core.errors import ConfigurationError
from databinding.mvvm.bindable import BindableProperty
from databinding.mvvm.binder import Binder
from databinding.mvvm.binding import BindingMode, OneWayBinding, OneWayToSourceBinding, TwoWayBinding
from databinding.mvvm.converters import InverseBooleanConverter
from databinding.mvvm.qt import QtBindableBase, widget_binding, widget_event
from databinding.mvvm.registry import bindings


# Ensure QApplication exists for Qt tests
@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class LoginViewModel(QtBindableBase):
    username = BindableProperty(default="")
    remember = BindableProperty(default=False)
    age = BindableProperty(default=0)


# =============================================================================
# QtBindableBase
# =============================================================================

class TestQtBindableBase:

    def test_property_changed_signal(self, qapp):
        vm = LoginViewModel()
        callback = MagicMock()
        vm.propertyChanged.connect(callback)

        vm.username = "Alice"

        callback.assert_called_once_with("username", "Alice")

    def test_subscribe_and_unsubscribe(self, qapp):
        vm = LoginViewModel()
        names = []

        unsubscribe = vm.subscribe(names.append)
        vm.age = 30
        unsubscribe()
        vm.age = 31

        assert names == ["age"]

    def test_manual_notification(self, qapp):
        vm = LoginViewModel()
        vm.username = "Bob"
        callback = MagicMock()
        vm.propertyChanged.connect(callback)

        vm.notify_property_changed("username")

        callback.assert_called_once_with("username", "Bob")


# =============================================================================
# Widgets
# =============================================================================

class TestWidgetBindings:

    def test_line_edit_two_way(self, qapp):
        vm = LoginViewModel()
        edit = QLineEdit()
        vm.username = "initial"

        binding = widget_binding(QLineEdit, "text", "username").bind(edit, vm)
        assert edit.text() == "initial"

        vm.username = "from model"
        assert edit.text() == "from model"

        edit.setText("typed")
        assert vm.username == "typed"

        binding()
        edit.setText("after unbind")
        assert vm.username == "typed"

    def test_label_one_way(self, qapp):
        vm = LoginViewModel()
        label = QLabel()

        widget_binding(QLabel, "text", "username", mode=BindingMode.ONE_WAY).bind(label, vm)
        vm.username = "Shown"

        assert label.text() == "Shown"

    def test_checkbox_with_converter(self, qapp):
        vm = LoginViewModel()
        check = QCheckBox()

        TwoWayBinding(model_property="remember", control_property="checked",
                      control_event="toggled", converter=InverseBooleanConverter).bind(check, vm)
        assert check.isChecked() is True

        check.setChecked(False)
        assert vm.remember is True

    def test_spin_box_to_source(self, qapp):
        vm = LoginViewModel()
        spin = QSpinBox()

        OneWayToSourceBinding(model_property="age", control_property="value",
                              control_event="valueChanged").bind(spin, vm)
        spin.setValue(42)

        assert vm.age == 42

    def test_custom_qobject_signal(self, qapp):
        class Slider(QObject):
            moved = Signal(int)

            def __init__(self):
                super().__init__()
                self.position = 0

        vm = LoginViewModel()
        slider = Slider()
        TwoWayBinding(model_property="age", control_property="position",
                      control_event="moved").bind(slider, vm)

        slider.position = 7
        slider.moved.emit(7)

        assert vm.age == 7

    def test_binder_with_widget_view(self, qapp):
        @bindings({
            "name_edit": widget_binding(QLineEdit, "text", "username"),
            "age_spin": OneWayBinding(model_property="age", control_property="value"),
        })
        class LoginView(QWidget):
            def __init__(self):
                super().__init__()
                self.name_edit = QLineEdit(self)
                self.age_spin = QSpinBox(self)

        vm = LoginViewModel()
        view = LoginView()

        with Binder(view, vm) as binder:
            assert binder.binding_count == 2
            vm.age = 5
            view.name_edit.setText("Carol")
            assert view.age_spin.value() == 5
            assert vm.username == "Carol"

        vm.age = 9
        assert view.age_spin.value() == 5


class TestWidgetBindingFactory:

    def test_known_events(self):
        assert widget_event(QLineEdit, "text") == "textChanged"
        assert widget_event(QCheckBox, "checked") == "toggled"
        assert widget_event(QLabel, "text") is None

    def test_default_event_name(self):
        assert widget_event(QWidget, "title") == "titleChanged"

    def test_one_way_has_no_event(self):
        desc = widget_binding(QLineEdit, "text", "username", mode=BindingMode.ONE_WAY)
        assert desc.mode is BindingMode.ONE_WAY
        assert desc.control_event is None

    def test_explicit_event_wins(self):
        desc = widget_binding(QLineEdit, "text", "username", control_event="editingFinished")
        assert desc.control_event == "editingFinished"

    def test_read_only_widget_property(self):
        with pytest.raises(ConfigurationError):
            widget_binding(QLabel, "text", "username")
