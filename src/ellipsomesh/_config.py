from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from ellipsomesh.resolution import DEFAULT_SECTORS, DEFAULT_STACKS, TessellationResolution
from ellipsomesh.validation import InvalidResolutionError

CONFIG_DIR = Path.home() / ".ellipsomesh"
CONFIG_FILE = CONFIG_DIR / "ellipsomesh.cfg"
DEFAULT_CONFIG = {
    "_comment": "Default tessellation used when --sectors/--stacks are omitted. Both must be positive integers.",
    "sectors": DEFAULT_SECTORS,
    "stacks": DEFAULT_STACKS,
}


def ensure_user_config() -> None:
    """Ensure ~/.ellipsomesh/ellipsomesh.cfg exists with sane defaults."""

    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if CONFIG_FILE.exists():
        return

    try:
        CONFIG_FILE.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        loaded = json.loads(CONFIG_FILE.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(loaded, dict):
        return DEFAULT_CONFIG.copy()
    return loaded


def _coerce_division(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value if value >= 1 else default


def get_resolution_settings() -> TessellationResolution:
    """Return the configured default resolution, falling back per field on bad values."""

    raw_config = _load_user_config()
    sectors = _coerce_division(raw_config.get("sectors"), DEFAULT_SECTORS)
    stacks = _coerce_division(raw_config.get("stacks"), DEFAULT_STACKS)
    try:
        return TessellationResolution(sectors, stacks)
    except InvalidResolutionError:
        return TessellationResolution(DEFAULT_SECTORS, DEFAULT_STACKS)
