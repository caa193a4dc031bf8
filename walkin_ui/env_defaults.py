"""Read defaults for the UI suite from a workspace ``.env`` file.

Exported environment variables always win; the file only fills gaps so a
developer can pin ``UI_BASE_URL`` or ``PLAYWRIGHT_BROWSERS`` locally without
touching their shell.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict

ENV_FILE = Path(__file__).resolve().parents[1] / ".env"


@lru_cache(maxsize=1)
def _load_env_defaults() -> Dict[str, str]:
    if not ENV_FILE.exists():
        return {}

    defaults: Dict[str, str] = {}
    for raw in ENV_FILE.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export "):].strip()
        value = value.strip()
        if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
            value = value[1:-1]
        defaults[key] = value
    return defaults


def get_env_default(key: str) -> str | None:
    return _load_env_defaults().get(key)


def get_setting(key: str, default: str) -> str:
    """Environment variable, then ``.env`` entry, then ``default``."""
    value = os.getenv(key)
    if value:
        return value
    return get_env_default(key) or default
