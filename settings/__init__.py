"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("SWING_DB_PATH", "swing.duckdb")

# Logging
LOG_DIR = Path("logs")

# Baseline API
BASELINE_API_URL = os.getenv("SWING_BASELINE_API_URL", "http://localhost:8080/api")
API_TIMEOUT = 60
MAX_CONCURRENT = 20

# Cycles
MIN_CYCLE = 1900
MAX_CYCLE = 2100

# Elasticity (empirical tuning values, not a validated model)
ELASTICITY_DIVISOR = float(os.getenv("SWING_ELASTICITY_DIVISOR", "5"))
ELASTICITY_MIN = float(os.getenv("SWING_ELASTICITY_MIN", "0.5"))
ELASTICITY_MAX = float(os.getenv("SWING_ELASTICITY_MAX", "3.0"))

# Solver / projection
SOLVER_TOLERANCE_PP = 0.05
FLIP_THRESHOLD_PP = 0.1
MAX_SWING_PP = 30.0
TURNOUT_FACTOR_MIN = 0.5
TURNOUT_FACTOR_MAX = 1.5

# Extrusion
BASE_HEIGHT = 1000.0
RANGE_HEIGHT = 18000.0
