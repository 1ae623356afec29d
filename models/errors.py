"""Exceptions raised by the slider engine."""


class SliderError(Exception):
    pass


class ConfigurationError(SliderError, ValueError):
    """Bounds or values that cannot produce a consistent handle sequence."""


class HandleIndexError(SliderError, IndexError):
    """A handle index outside ``0..count-1``."""

    def __init__(self, index: int, count: int):
        super().__init__(f"Handle index {index} out of range for {count} handle(s)")
        self.index = index
        self.count = count
