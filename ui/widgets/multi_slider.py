"""Multi-handle slider widget hosting a SliderEngine."""

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import Signal, QRect, QSize
from PySide6.QtGui import QColor, QPen
from typing import Optional

from models.alignment import ValueLike, offset_of_value
from models.slider_engine import SliderEngine
from models.slider_model import SliderConfig
from ui.qt_compat import Qt, QSizePolicy, QPainter

# Extra pixels around a handle that still count as hitting it
CLICK_PADDING = 4

# Focus reasons that put a handle into keyboard mode; mouse focus is handled by the press itself
_KEYBOARD_FOCUS_REASONS = (
    Qt.TabFocusReason,
    Qt.BacktabFocusReason,
    Qt.ShortcutFocusReason,
    Qt.OtherFocusReason,
)


class MultiSlider(QWidget):
    """A slider with any number of handles.

    All value logic lives in the engine; this widget only measures the track,
    forwards pointer/keyboard/focus events and paints the result.
    """

    beforeChange = Signal(object)
    valueChanged = Signal(object)
    afterChange = Signal(object)
    sliderClicked = Signal(float)
    # Values replaced from outside (setValue/setConfig); no change callbacks fire then
    valuesReset = Signal(object)

    def __init__(
        self,
        config: Optional[SliderConfig] = None,
        value: ValueLike = None,
        default_value: ValueLike = 0.0,
        handle_count: Optional[int] = None,
        with_bars: bool = False,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._engine = SliderEngine(
            config,
            value=value,
            default_value=default_value,
            handle_count=handle_count,
            on_before_change=self._on_before_change,
            on_change=self._on_change,
            on_after_change=self._on_after_change,
            on_slider_click=self.sliderClicked.emit,
        )
        self._with_bars = bool(with_bars)

        try:
            self.setFocusPolicy(Qt.StrongFocus)
            self.setAttribute(Qt.WA_TransparentForMouseEvents, False)
        except Exception:
            pass
        self._apply_orientation()

    # --------------- Public API ---------------
    @property
    def engine(self) -> SliderEngine:
        return self._engine

    def config(self) -> SliderConfig:
        return self._engine.config

    def value(self):
        return self._engine.get_value()

    def values(self):
        return self._engine.values

    def setValue(self, value: ValueLike):
        self._engine.set_value(value)
        self.valuesReset.emit(self._engine.get_value())
        self.update()

    def setConfig(self, config: SliderConfig, value: ValueLike = None):
        self._engine.configure(config, value=value)
        self._apply_orientation()
        self.valuesReset.emit(self._engine.get_value())
        self.update()

    def withBars(self) -> bool:
        return self._with_bars

    def setWithBars(self, enabled: bool):
        self._with_bars = bool(enabled)
        self.update()

    # --------------- Geometry ---------------
    def _apply_orientation(self):
        if self._engine.config.is_vertical:
            self.setMinimumSize(22, 0)
            self.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Expanding)
        else:
            self.setMinimumSize(0, 22)
            self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

    def _thickness(self) -> int:
        rect = self.contentsRect()
        return rect.width() if self._engine.config.is_vertical else rect.height()

    def _track_height(self) -> int:
        return max(3, self._thickness() // 6)

    def _handle_size(self) -> int:
        return max(8, self._track_height() * 2)

    def _track_origin(self) -> int:
        rect = self.contentsRect()
        start = rect.top() if self._engine.config.is_vertical else rect.left()
        return start + self._handle_size() // 2

    def measure_track_length(self) -> float:
        """Usable pixel length along the slider axis (handles stay inside it)."""
        rect = self.contentsRect()
        axis = rect.height() if self._engine.config.is_vertical else rect.width()
        return float(max(0, axis - self._handle_size()))

    def position_from_event(self, event) -> float:
        """Pointer coordinate along the slider axis, relative to the track origin."""
        point = event.position() if hasattr(event, "position") else event.pos()
        raw = point.y() if self._engine.config.is_vertical else point.x()
        return float(raw) - self._track_origin()

    def _orthogonal_from_event(self, event) -> float:
        point = event.position() if hasattr(event, "position") else event.pos()
        return float(point.x() if self._engine.config.is_vertical else point.y())

    def handle_position(self, index: int) -> float:
        """Track-relative pixel position of the centre of handle ``index``."""
        bounds = self._engine.bounds
        length = self.measure_track_length()
        offset = offset_of_value(self._engine.values[index], length, bounds.minimum, bounds.maximum)
        if self._engine.config.invert:
            offset = length - offset
        return offset

    def handle_at(self, position: float) -> Optional[int]:
        """Topmost handle under ``position``, checked front to back."""
        reach = self._handle_size() / 2 + CLICK_PADDING
        for index in reversed(self._engine.handles.z_order):
            if abs(position - self.handle_position(index)) <= reach:
                return index
        return None

    def sizeHint(self):
        """Provide a size hint for the widget."""
        try:
            if self._engine.config.is_vertical:
                return QSize(max(22, self.minimumWidth()), 200)
            return QSize(200, max(22, self.minimumHeight()))
        except Exception:
            return super().sizeHint()

    # --------------- Engine callbacks ---------------
    def _on_before_change(self, value):
        self.update()
        self.beforeChange.emit(value)

    def _on_change(self, value):
        self.update()
        self.valueChanged.emit(value)

    def _on_after_change(self, value):
        self.update()
        self.afterChange.emit(value)

    # --------------- Painting ---------------
    def _axis_rect(self, start: float, end: float, thickness: int) -> QRect:
        """Rectangle spanning ``start..end`` along the axis, centred across it."""
        rect = self.contentsRect()
        origin = self._track_origin()
        lo, hi = int(min(start, end)) + origin, int(max(start, end)) + origin
        if self._engine.config.is_vertical:
            cx = rect.center().x()
            return QRect(cx - thickness // 2, lo, thickness, hi - lo)
        cy = rect.center().y()
        return QRect(lo, cy - thickness // 2, hi - lo, thickness)

    def paintEvent(self, event):
        """Paint track, optional bars and the handles in stacking order."""
        painter = QPainter(self)
        track_h = self._track_height()
        handle_w = self._handle_size()
        length = self.measure_track_length()
        disabled = self._engine.config.disabled or not self.isEnabled()

        # Track
        painter.setPen(QPen(QColor("#666666"), 1))
        painter.setBrush(QColor("#444444"))
        painter.drawRect(self._axis_rect(-handle_w / 2, length + handle_w / 2, track_h))

        positions = [self.handle_position(i) for i in range(len(self._engine.values))]

        # Bars between consecutive handles; the outer bars stay in the track colour
        if self._with_bars and len(positions) > 1:
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor("#555555") if disabled else QColor("#15c915"))
            for a, b in zip(positions, positions[1:]):
                painter.drawRect(self._axis_rect(a, b, track_h))

        # Handles, back to front
        active = self._engine.active_index
        for index in self._engine.handles.z_order:
            if disabled:
                painter.setBrush(QColor("#777777"))
            elif index == active:
                painter.setBrush(QColor("#2a82da"))
            else:
                painter.setBrush(QColor("#dddddd"))
            painter.setPen(QPen(QColor("#222222"), 1))
            centre = positions[index]
            painter.drawRect(self._axis_rect(centre - handle_w / 2, centre + handle_w / 2, track_h * 2))

    # --------------- Pointer ---------------
    def mousePressEvent(self, event):
        """Start a drag on the handle under the pointer, or snap one to it."""
        position = self.position_from_event(event)
        length = self.measure_track_length()
        index = self.handle_at(position)

        if index is not None:
            self._engine.start_drag(
                index,
                position,
                length,
                orthogonal=self._orthogonal_from_event(event),
                detect_gesture=self._is_touch(event),
            )
        else:
            self._engine.press_track(position, length)

        try:
            event.accept()
        except Exception:
            pass
        try:
            self.setFocus(Qt.MouseFocusReason)
        except Exception:
            pass

    def mouseMoveEvent(self, event):
        """Forward pointer motion to the running session."""
        self._engine.drag_to(
            self.position_from_event(event), orthogonal=self._orthogonal_from_event(event)
        )
        try:
            event.accept()
        except Exception:
            pass

    def mouseReleaseEvent(self, event):
        """Finish the drag; a release without motion counts as a click."""
        try:
            event.accept()
        except Exception:
            pass
        self._engine.end_drag()
        self._engine.click_track(self.position_from_event(event), self.measure_track_length())

    @staticmethod
    def _is_touch(event) -> bool:
        try:
            return event.source() != Qt.MouseEventNotSynthesized
        except Exception:
            return False

    # --------------- Keyboard & focus ---------------
    def _increment_key(self):
        config = self._engine.config
        if config.is_vertical:
            return Qt.Key_Up if config.invert else Qt.Key_Down
        return Qt.Key_Left if config.invert else Qt.Key_Right

    def _decrement_key(self):
        config = self._engine.config
        if config.is_vertical:
            return Qt.Key_Down if config.invert else Qt.Key_Up
        return Qt.Key_Right if config.invert else Qt.Key_Left

    def keyPressEvent(self, event):
        key = event.key()
        if key == self._increment_key():
            direction = 1
        elif key == self._decrement_key():
            direction = -1
        else:
            super().keyPressEvent(event)
            return
        modifier = bool(event.modifiers() & Qt.ShiftModifier)
        self._engine.nudge(direction, modifier=modifier)
        event.accept()

    def focusInEvent(self, event):
        if event.reason() in _KEYBOARD_FOCUS_REASONS:
            self._engine.focus(self._engine.handles.front_index)
        super().focusInEvent(event)

    def focusOutEvent(self, event):
        self._engine.blur()
        super().focusOutEvent(event)
