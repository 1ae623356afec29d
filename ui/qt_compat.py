"""Any-typed aliases for the PySide6 enums the slider widgets paint and dispatch on."""

from __future__ import annotations

from typing import Any, cast

from PySide6.QtCore import Qt as _Qt
from PySide6.QtGui import QPainter as _QPainter
from PySide6.QtWidgets import QSizePolicy as _QSizePolicy

Qt = cast(Any, _Qt)
QSizePolicy = cast(Any, _QSizePolicy)
QPainter = cast(Any, _QPainter)

__all__ = [
    "Qt",
    "QSizePolicy",
    "QPainter",
]
