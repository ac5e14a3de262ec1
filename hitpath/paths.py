"""Helper paths for accessing repository assets."""
from __future__ import annotations

from pathlib import Path


PACKAGE_ROOT = Path(__file__).resolve().parent
REPO_ROOT = PACKAGE_ROOT.parent
CONFIG_DIR = REPO_ROOT / "config"

DEFAULT_COORDINATE_PATH = CONFIG_DIR / "coordinates.json"
DEFAULT_PHYSICS_PATH = CONFIG_DIR / "physics.json"
