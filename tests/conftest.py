"""
Pytest configuration and shared fixtures for the gcodeplot tests.

Provides sample programs and a helper that writes them to a temporary
.gcode file.
"""

import os
import sys
from pathlib import Path

import pytest

# Add the parent directory to Python path so we can import the package
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))


SQUARE_PROGRAM = """\
; unit square, drawn with the pen down
G28
G0 X0 Y0
M280 P0 S50
G1 X10 Y0
G1 X10 Y10
G1 X0 Y10 ; left edge next
G1 X0 Y0
M280 P0 S0
"""

ARC_PROGRAM = """\
G0 X0 Y0
M280 P0 S50 G2 X0 Y10 I0 J5
G3 X0 Y0 I0 J-5 ; back down
M280 P0 S0
"""


@pytest.fixture
def square_program() -> str:
    return SQUARE_PROGRAM


@pytest.fixture
def arc_program() -> str:
    return ARC_PROGRAM


@pytest.fixture
def write_gcode(tmp_path):
    """Write text to ``<tmp>/<name>`` and return its path"""

    def _write(text: str, name: str = "drawing.gcode") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


# ============================================================================
# PYTEST CONFIGURATION HOOKS
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that test individual components in isolation"
    )
    config.addinivalue_line(
        "markers", "gcode: Tests specifically for G-code parsing and arc resolution"
    )
