"""Value-constraint engine behind the multi-handle slider."""

# Re-export key types for convenience when importing the package directly.
from .errors import ConfigurationError, HandleIndexError, SliderError
from .slider_model import ActiveState, Bounds, Orientation, SliderConfig
from .slider_engine import SliderEngine

__all__ = [
    "ActiveState",
    "Bounds",
    "ConfigurationError",
    "HandleIndexError",
    "Orientation",
    "SliderConfig",
    "SliderEngine",
    "SliderError",
]
