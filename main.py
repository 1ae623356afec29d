from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence, cast

from PySide6.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtGui import QPalette, QColor
from PySide6.QtCore import Qt

from models.errors import ConfigurationError
from models.slider_model import Orientation, SliderConfig
from ui.widgets.handle_inputs import HandleInputFields
from ui.widgets.multi_slider import MultiSlider
from utils.config_io import load_config
from utils.log_setup import configure_logging
from utils.settings_store import SliderSettings

logger = logging.getLogger(__name__)


DARK_STYLE_SHEET = """
QMainWindow,
QWidget#mainCentralWidget {
    background-color: #111111;
    color: #f0f0f0;
}

QDoubleSpinBox {
    background-color: #1c1c1c;
    color: #f0f0f0;
    border: 1px solid #3a3a3a;
    padding: 2px 4px;
}
"""


def set_dark_theme(app: QApplication) -> None:
    """Apply a dark theme to the application."""
    app.setStyle("Fusion")

    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(17, 17, 17))
    palette.setColor(QPalette.ColorRole.WindowText, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Base, QColor(28, 28, 28))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor(38, 38, 38))
    palette.setColor(QPalette.ColorRole.Text, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Button, QColor(43, 43, 43))
    palette.setColor(QPalette.ColorRole.ButtonText, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Highlight, QColor(42, 130, 218))
    palette.setColor(QPalette.ColorRole.HighlightedText, Qt.GlobalColor.black)
    palette.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.Text, QColor(115, 115, 115))

    app.setPalette(palette)
    app.setStyleSheet(DARK_STYLE_SHEET)


class DemoWindow(QMainWindow):
    """Slider, its input fields and a status line echoing the change events."""

    def __init__(
        self,
        config: SliderConfig,
        value: Optional[List[float]],
        handle_count: Optional[int],
        with_bars: bool,
        settings: Optional[SliderSettings] = None,
    ):
        super().__init__()
        self.setWindowTitle("MultiSlider")
        self.settings = settings

        central = QWidget()
        central.setObjectName("mainCentralWidget")
        layout = QVBoxLayout(central)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)

        self.slider = MultiSlider(
            config,
            value=value,
            default_value=value or 0.0,
            handle_count=handle_count,
            with_bars=with_bars,
        )
        self.inputs = HandleInputFields(self.slider)
        self.status = QLabel(self._describe("value", self.slider.value()))

        layout.addWidget(self.slider)
        layout.addWidget(self.inputs)
        layout.addWidget(self.status)
        self.setCentralWidget(central)
        self.resize(480, 320 if config.is_vertical else 140)

        self.slider.beforeChange.connect(lambda v: logger.info("before-change %s", v))
        self.slider.valueChanged.connect(lambda v: self.status.setText(self._describe("change", v)))
        self.slider.afterChange.connect(self._on_after_change)
        self.slider.sliderClicked.connect(
            lambda v: self.status.setText(self._describe("click", v))
        )

    @staticmethod
    def _describe(event: str, value) -> str:
        return f"{event}: {value}"

    def _on_after_change(self, value) -> None:
        logger.info("after-change %s", value)
        self.status.setText(self._describe("after-change", value))
        if self.settings is not None:
            self.settings.set_last_value(value)


def build_config(args: argparse.Namespace, settings: SliderSettings) -> SliderConfig:
    config_file = args.config or settings.last_config_file()
    config = SliderConfig()
    if config_file:
        try:
            config = load_config(config_file)
            settings.set_last_config_file(config_file)
        except (OSError, ValueError) as exc:
            if args.config:
                raise
            logger.warning("Ignoring last config file %s: %s", config_file, exc)

    changes = {}
    if args.min is not None:
        changes["minimum"] = args.min
    if args.max is not None:
        changes["maximum"] = args.max
    if args.step is not None:
        changes["step"] = args.step
    if args.min_distance is not None:
        changes["min_distance"] = args.min_distance
    if args.pearling:
        changes["pearling"] = True
    if args.invert:
        changes["invert"] = True
    if args.vertical:
        changes["orientation"] = Orientation.VERTICAL
    return config.with_changes(**changes) if changes else config


def run_app(args: argparse.Namespace, qt_argv: Sequence[str]) -> int:
    """Create the QApplication and show the demo window."""
    existing_app = QApplication.instance()
    app = existing_app or QApplication(list(qt_argv))
    set_dark_theme(cast(QApplication, app))

    settings = SliderSettings()
    try:
        config = build_config(args, settings)
        value = args.value if args.value else (settings.last_value() or None)
        window = DemoWindow(config, value, args.handles, args.with_bars, settings)
    except (ConfigurationError, OSError, ValueError) as exc:
        logger.error("Cannot start slider: %s", exc)
        return 2

    window.show()
    result = app.exec()
    settings.sync()
    return result


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multislider", description="Multi-handle range slider demo"
    )
    parser.add_argument("--config", help="JSON slider configuration file")
    parser.add_argument("--handles", type=int, help="Number of handles to show")
    parser.add_argument("--value", type=float, nargs="+", help="Initial handle values")
    parser.add_argument("--min", type=float, help="Lower bound")
    parser.add_argument("--max", type=float, help="Upper bound")
    parser.add_argument("--step", type=float, help="Step size (> 0)")
    parser.add_argument("--min-distance", type=float, help="Minimum distance between handles")
    parser.add_argument("--pearling", action="store_true", help="Let handles push each other")
    parser.add_argument("--invert", action="store_true", help="Invert the slider direction")
    parser.add_argument("--vertical", action="store_true", help="Vertical orientation")
    parser.add_argument("--with-bars", action="store_true", help="Draw bars between handles")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = make_parser()
    args, remaining = parser.parse_known_args(argv)
    configure_logging(args.log_level, args.log_file)
    qt_argv = [sys.argv[0], *remaining]
    return run_app(args, qt_argv)


if __name__ == "__main__":
    raise SystemExit(main())
