"""Shared fixtures for the PNGN Styler test suite."""

import pytest

from pngn_color import ColorProfile
from pngn_config import StylerConfig, reload_config
from pngn_render import StyleRenderer, TerminalCapability
from pngn_width import WidthCalculator


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts and ends with the built-in configuration."""
    reload_config(StylerConfig())
    yield
    reload_config(StylerConfig())


@pytest.fixture
def calculator() -> WidthCalculator:
    return WidthCalculator(cache_size=100, enable_cache=True)


@pytest.fixture
def renderer() -> StyleRenderer:
    return StyleRenderer(width_cache_size=100, sequence_cache_size=50, enable_cache=True)


@pytest.fixture
def truecolor() -> TerminalCapability:
    return TerminalCapability(ColorProfile.TRUE_COLOR)
