"""Configuration loader for wnconv.

Loads defaults from config.json at project root, with hardcoded fallbacks.
"""

import json
from pathlib import Path
from typing import Any, Iterable, Optional

# Hardcoded fallback defaults
FALLBACK_DEFAULTS = {
    "data_dir_candidates": [
        "/usr/local/WordNet-3.0/dict",      # Default install
        "/usr/WordNet-3.0/dict",            # Default with --prefix=/usr
        "/usr/local/share/WordNet",         # FreeBSD
        "./dict",                           # Extracted locally
    ],
    "build_dir": "build/wordnet",
    "db_name": "lexicon.db",
    "commit_threshold": 2000,
    "error_limit": 0,
    "force": False,
    "quiet": False,
    "verbose": False,
}

_config: dict[str, Any] | None = None


def _find_config() -> Path | None:
    """Find config.json by walking up from current file."""
    paths = [
        Path(__file__).parent.parent.parent / "config.json",  # python/wnconv -> root
        Path.cwd() / "config.json",
        Path.cwd().parent / "config.json",
    ]
    for path in paths:
        if path.exists():
            return path
    return None


def load() -> dict[str, Any]:
    """Load configuration from config.json or use fallbacks."""
    global _config
    if _config is not None:
        return _config

    config_path = _find_config()
    if config_path:
        try:
            with open(config_path) as f:
                _config = json.load(f)
                return _config
        except (json.JSONDecodeError, OSError):
            pass

    # Fallback
    _config = {"defaults": FALLBACK_DEFAULTS}
    return _config


def reset() -> None:
    """Forget the cached configuration so the next load() re-reads it."""
    global _config
    _config = None


def get_default(key: str, fallback: Any = None) -> Any:
    """Get a default value from config."""
    cfg = load()
    return cfg.get("defaults", {}).get(key, fallback)


def find_data_dir(candidates: Optional[Iterable[Path | str]] = None) -> Path | None:
    """Return the first candidate that is an existing directory."""
    if candidates is None:
        candidates = default_data_dir_candidates()
    for candidate in candidates:
        path = Path(candidate)
        if path.is_dir():
            return path
    return None


# Convenience accessors
def default_data_dir_candidates() -> list[str]:
    return get_default("data_dir_candidates", FALLBACK_DEFAULTS["data_dir_candidates"])


def default_build_dir() -> str:
    return get_default("build_dir", FALLBACK_DEFAULTS["build_dir"])


def default_db_name() -> str:
    return get_default("db_name", FALLBACK_DEFAULTS["db_name"])


def default_commit_threshold() -> int:
    return get_default("commit_threshold", FALLBACK_DEFAULTS["commit_threshold"])


def default_error_limit() -> int:
    return get_default("error_limit", FALLBACK_DEFAULTS["error_limit"])
