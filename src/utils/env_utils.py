"""Minimal .env file reader."""
from pathlib import Path
from typing import Dict, Iterable


def read_env_file(path: Path, keys: Iterable[str]) -> Dict[str, str]:
    """
    Parse ``KEY=value`` lines from an env file.

    Blank lines, ``#`` comments and keys outside ``keys`` are skipped.
    Surrounding quotes are stripped from values. A missing file yields ``{}``.
    """
    if not path.exists():
        return {}

    wanted = set(keys)
    values: Dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if sep and key in wanted:
            values[key] = value.strip().strip("'\"")
    return values
