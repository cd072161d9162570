from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

from .settings import load_settings
from .solutions import Solution

SOLUTION_DIR_ENV = "STACK_SOLVER_SOLUTION_DIR"


def get_solution_dir() -> str:
    env_dir = os.getenv(SOLUTION_DIR_ENV)
    if env_dir:
        return str(Path(env_dir).expanduser().resolve())
    return str((Path.cwd() / load_settings()["solution_dir"]).resolve())


def ensure_solution_dir() -> str:
    path = Path(get_solution_dir())
    path.mkdir(parents=True, exist_ok=True)
    return str(path)


def _solution_path(name: str) -> str:
    return str(Path(get_solution_dir()) / f"{name}.json")


def list_solutions() -> list[str]:
    path = ensure_solution_dir()
    files = [f[:-5] for f in os.listdir(path) if f.endswith(".json")]
    files.sort()
    return files


def load_solution(name: str) -> Dict[str, Any]:
    with open(_solution_path(name), "r", encoding="utf-8") as f:
        return json.load(f)


def save_solution(name: str, payload: Any) -> str:
    if isinstance(payload, Solution):
        payload = payload.to_dict()
    ensure_solution_dir()
    path = _solution_path(name)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    return path


__all__ = [
    "get_solution_dir",
    "ensure_solution_dir",
    "list_solutions",
    "load_solution",
    "save_solution",
]
