"""Environment loading helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv


def load_env(env_path: Path | None = None, override: bool = False) -> bool:
    """Load environment variables from .env (or INDENT_TREE_ENV_FILE)."""
    env_file_override = os.getenv("INDENT_TREE_ENV_FILE", "").strip()
    if env_path is not None:
        target_path = env_path
    elif env_file_override:
        target_path = Path(env_file_override)
    else:
        target_path = Path.cwd() / ".env"

    if not target_path.exists():
        return False
    return bool(load_dotenv(dotenv_path=target_path, override=override))
