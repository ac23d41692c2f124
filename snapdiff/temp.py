"""Per-process temporary directory for captured screenshots."""

import atexit
import itertools
import shutil
import tempfile
from pathlib import Path
from typing import Optional

_temp_dir: Optional[Path] = None
_counter = itertools.count()


def init(base_dir: Optional[str] = None) -> Path:
    """Create the temporary directory under ``base_dir`` (system default if None).

    Subsequent calls reuse the directory created by the first one.
    """
    global _temp_dir

    if _temp_dir is None or not _temp_dir.exists():
        if base_dir:
            Path(base_dir).mkdir(parents=True, exist_ok=True)
        _temp_dir = Path(tempfile.mkdtemp(prefix="snapdiff-", dir=base_dir))
        atexit.register(cleanup)

    return _temp_dir


def path(suffix: str = ".png") -> Path:
    """New unique file path inside the temporary directory."""
    return init() / f"{next(_counter)}{suffix}"


def cleanup() -> None:
    global _temp_dir

    if _temp_dir is not None:
        shutil.rmtree(_temp_dir, ignore_errors=True)
        _temp_dir = None
