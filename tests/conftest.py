"""Shared fixtures for engine tests."""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Tuple

import pytest

from models.slider_engine import SliderEngine
from models.slider_model import SliderConfig


class EventLog:
    """Collects engine notifications as ``(name, value)`` pairs."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Any]] = []

    def recorder(self, name: str):
        return lambda value: self.events.append((name, value))

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def values_of(self, name: str) -> List[Any]:
        return [value for n, value in self.events if n == name]


@pytest.fixture()
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture()
def make_engine(event_log: EventLog):
    def _make(value=None, handle_count=None, default_value=0.0, **config_kwargs) -> SliderEngine:
        return SliderEngine(
            SliderConfig(**config_kwargs),
            value=value,
            default_value=default_value,
            handle_count=handle_count,
            on_before_change=event_log.recorder("before"),
            on_change=event_log.recorder("change"),
            on_after_change=event_log.recorder("after"),
            on_slider_click=event_log.recorder("click"),
        )

    return _make


@pytest.fixture()
def restore_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
