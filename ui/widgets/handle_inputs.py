"""Numeric input fields mirroring the handles of a MultiSlider."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from PySide6.QtCore import Signal
from PySide6.QtGui import QWheelEvent
from PySide6.QtWidgets import QDoubleSpinBox, QHBoxLayout, QWidget

from ui.qt_compat import Qt
from ui.widgets.multi_slider import MultiSlider


def decimals_for_step(step: float) -> int:
    """Number of fractional digits needed to show multiples of ``step``."""
    exponent = Decimal(str(step)).normalize().as_tuple().exponent
    return max(0, -int(exponent))


class HandleSpinBox(QDoubleSpinBox):
    """Spin box for one handle; ignores stray wheel events and reports focus."""

    focused = Signal()
    blurred = Signal()

    def wheelEvent(self, event: QWheelEvent) -> None:
        # Ignore wheel events unless the spinbox has explicit focus and Ctrl is held
        try:
            if self.hasFocus() and (event.modifiers() & Qt.ControlModifier):
                return super().wheelEvent(event)
        except Exception:
            pass
        event.ignore()

    def focusInEvent(self, event):
        super().focusInEvent(event)
        self.focused.emit()

    def focusOutEvent(self, event):
        super().focusOutEvent(event)
        self.blurred.emit()


class HandleInputFields(QWidget):
    """One spin box per slider handle.

    Focusing a box starts a keyboard session on its handle, edits move the
    handle through the engine, and leaving the box ends the session. The boxes
    always show the engine's resolved values.
    """

    def __init__(self, slider: MultiSlider, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._slider = slider
        self._spins: List[HandleSpinBox] = []
        self._syncing = False

        self._layout = QHBoxLayout(self)
        try:
            self._layout.setContentsMargins(0, 0, 0, 0)
            self._layout.setSpacing(6)
        except Exception:
            pass

        slider.valueChanged.connect(self.sync)
        # Bounds or handle count may have changed as well
        slider.valuesReset.connect(self.rebuild)
        self.rebuild()

    def spin_boxes(self) -> List[HandleSpinBox]:
        return list(self._spins)

    def rebuild(self, *_args) -> None:
        """Recreate the boxes for the current handle count and bounds."""
        for spin in self._spins:
            self._layout.removeWidget(spin)
            spin.deleteLater()
        self._spins = []

        engine = self._slider.engine
        bounds = engine.bounds
        for index in range(len(engine.values)):
            spin = HandleSpinBox(self)
            spin.setDecimals(decimals_for_step(bounds.step))
            spin.setRange(bounds.minimum, bounds.maximum)
            spin.setSingleStep(bounds.step)
            spin.setKeyboardTracking(False)
            spin.setEnabled(not engine.config.disabled)
            spin.valueChanged.connect(lambda v, i=index: self._on_edit(i, v))
            spin.focused.connect(lambda i=index: self._slider.engine.focus(i))
            spin.blurred.connect(self._slider.engine.blur)
            spin.editingFinished.connect(self._slider.engine.blur)
            self._layout.addWidget(spin)
            self._spins.append(spin)
        self.sync()

    def sync(self, *_args) -> None:
        """Show the engine's current values without feeding them back."""
        self._syncing = True
        try:
            for spin, value in zip(self._spins, self._slider.engine.values):
                spin.setValue(value)
        finally:
            self._syncing = False

    def _on_edit(self, index: int, value: float) -> None:
        if self._syncing:
            return
        if not self._slider.engine.move_handle(index, value):
            # Blocked or unchanged: snap the box back to the resolved value
            self.sync()
