"""Atomic file writes into the vault."""

import os
import uuid
from pathlib import Path


def atomic_write_text(filepath: Path, text: str) -> None:
    """Write text to filepath so readers only ever see the old or new file.

    The data goes to a uniquely named temporary file in the same directory
    and is then renamed over the target. If anything fails before the
    rename, the temporary file is removed and the target is untouched.
    """
    filepath = Path(filepath)
    tmp_path = filepath.with_name(f"{filepath.name}.{uuid.uuid4().hex[:8]}.tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as fh:
            fh.write(text)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, filepath)
    except BaseException:
        try:
            tmp_path.unlink()
        except FileNotFoundError:
            pass
        raise


def write_document(filepath: Path, content: str) -> Path:
    """Persist a formatted article, creating the Articles folder if needed."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    atomic_write_text(filepath, content)
    return filepath
