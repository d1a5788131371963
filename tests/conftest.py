import pytest
from loguru import logger

from databinding.core.events import Signal
from databinding.mvvm.bindable import BindableBase, BindableProperty


class PersonModel(BindableBase):
    """Model used across the binding tests."""
    Text = BindableProperty(default="")
    count = BindableProperty(default=0)
    enabled = BindableProperty(default=True)
    command = BindableProperty(default=None)

    def __init__(self):
        super().__init__()
        self.items = [0, 0, 0, 0]


class FakeControl:
    """Toolkit-free control with plain attributes and named event signals."""

    def __init__(self):
        self.Text = ""
        self.value = 0
        self.checked = False
        self.cells = ["a", "b", "c", "d"]
        self.Change = Signal("Change")
        self.clicked = Signal("clicked")

    def fire(self, event_name: str, *args):
        getattr(self, event_name).emit(*args)


@pytest.fixture
def model():
    return PersonModel()


@pytest.fixture
def control():
    return FakeControl()


@pytest.fixture
def log_messages():
    """Collect loguru output as (level, message) pairs."""
    messages = []
    handler_id = logger.add(lambda m: messages.append((m.record["level"].name, m.record["message"])),
                            level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def make_control():
    """Factory for additional controls in multi-control views."""
    return FakeControl
