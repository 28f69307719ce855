# kpca/config.py
import os
from dotenv import load_dotenv
from pathlib import Path

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _resolve(path_like):
    p = Path(path_like)
    return p if p.is_absolute() else PROJECT_ROOT / p


def _to_seed(val):
    if val is None or str(val).strip() == "":
        return None
    return int(val)


# Data layout
DATA_DIR = _resolve(os.getenv("KPCA_DATA_DIR", "data"))

# Solver defaults
SOLVER = os.getenv("KPCA_SOLVER", "dense").lower()
ATOL = float(os.getenv("KPCA_ATOL", "1e-10"))
TOL = float(os.getenv("KPCA_TOL", "0.0"))
MAX_ITER = int(os.getenv("KPCA_MAX_ITER", "300"))
BETA = float(os.getenv("KPCA_BETA", "1.0"))
SEED = _to_seed(os.getenv("KPCA_SEED"))

LOG_LEVEL = os.getenv("KPCA_LOG_LEVEL", "INFO").upper()

SOLVERS = ("dense", "iterative")
