"""Read defaults for the E2E suite from ``.env.defaults``.

The file lives at the repository root and holds ``KEY=value`` lines.
It is the lowest-priority configuration layer: real environment
variables always win (see ``chat_e2e.config``).
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict

ENV_DEFAULTS_FILE = Path(__file__).resolve().parents[1] / ".env.defaults"


def _clean_value(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    # unquoted values may carry a trailing " # comment"
    return value.split(" #", 1)[0].rstrip()


def parse_env_defaults(text: str) -> Dict[str, str]:
    """Parse ``KEY=value`` lines; ``export`` prefixes and comments are allowed."""
    defaults: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("export "):
            line = line[len("export "):]
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        defaults[key] = _clean_value(value)
    return defaults


@lru_cache(maxsize=1)
def _load_env_defaults() -> Dict[str, str]:
    if not ENV_DEFAULTS_FILE.exists():
        return {}
    return parse_env_defaults(ENV_DEFAULTS_FILE.read_text(encoding="utf-8"))


def get_env_default(key: str) -> str | None:
    return _load_env_defaults().get(key)
