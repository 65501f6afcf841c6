from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional

# Version of the manual content, used when the package is not installed
MANUAL_VERSION = "2.0.0"


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (OSError, subprocess.CalledProcessError):
        return None


def get_version() -> str:
    try:
        return importlib.metadata.version("manpager")
    except importlib.metadata.PackageNotFoundError:
        return MANUAL_VERSION


def get_commit() -> Optional[str]:
    """Short commit hash of the source checkout, if running from one."""
    commit = _run_git(["rev-parse", "HEAD"], cwd=Path(__file__).resolve().parent)
    return commit[:7] if commit else None


def get_version_string() -> str:
    commit = get_commit()
    suffix = f" ({commit})" if commit else ""
    return f"Genesis Manual System v{get_version()}{suffix}"
