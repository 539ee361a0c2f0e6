"""
Central configuration for gcodeplot tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("GCODEPLOT_TRACE", "0")).lower() in ("1", "true", "yes", "on")

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


# Squared-distance threshold below which two points/vectors are treated as equal
DEFAULT_TOLERANCE: float = _env_float("GCODEPLOT_TOLERANCE", 1e-5)

# Arc render density: steps = clamp(round(radius * ARC_STEP_SCALE), ARC_MIN_STEPS, ARC_MAX_STEPS)
ARC_STEP_SCALE: float = _env_float("GCODEPLOT_ARC_STEP_SCALE", 3.6)
ARC_MIN_STEPS: int = max(1, _env_int("GCODEPLOT_ARC_MIN_STEPS", 18))
ARC_MAX_STEPS: int = max(ARC_MIN_STEPS, _env_int("GCODEPLOT_ARC_MAX_STEPS", 720))

# Pen servo (M280 P0 S<n>): values at or above the threshold mean "pen down"
PEN_DOWN_THRESHOLD: float = 40.0
PEN_DOWN_S: int = 50
PEN_UP_S: int = 0

# Derived file names and the marker line written between old and appended commands
GCODE_SUFFIX: str = ".gcode"
TRANSFORMED_SUFFIX: str = "_transformed.gcode"
ADDED_SUFFIX: str = "_added.gcode"
ADDED_SEPARATOR: str = "; added by gcodeplot"

LOG_LEVEL_DEFAULT: str = "INFO"
