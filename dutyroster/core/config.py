# dutyroster/core/config.py

import os
from pathlib import Path
from typing import Final

# ==========================
# Geometry
# ==========================

#: Pixel height of one hour row in a day column.
#: A full day column is therefore HOUR_HEIGHT_PX * 24 = 1440 px tall.
HOUR_HEIGHT_PX: Final[int] = 60

#: Opacity applied to placed shift blocks so grid lines stay visible.
SHIFT_BLOCK_OPACITY: Final[float] = 0.9


# ==========================
# Date and time formats
# ==========================

#: ISO format for date strings exchanged with the roster backend.
DATE_FORMAT_ISO: Final[str] = "%Y-%m-%d"

#: Format for shift start/end times ("14:00").
TIME_FORMAT_HM: Final[str] = "%H:%M"

#: Length of an "HH:MM" string. Backend times ("22:00:00") are cut to this.
TIME_HM_LENGTH: Final[int] = 5


# ==========================
# Environment
# ==========================

#: Production switch shared by logging, Sentry and CORS setup.
IS_PRODUCTION: Final[bool] = os.getenv("PRODUCTION", "false").lower() == "true"

#: Directory holding shift_types.json. Defaults to the packaged data files.
DATA_DIR: Final[Path] = Path(
    os.getenv("DUTYROSTER_DATA_DIR", str(Path(__file__).resolve().parent.parent / "data"))
)

#: Application version reported by /health and Sentry releases.
APP_VERSION: Final[str] = "0.1.0"
