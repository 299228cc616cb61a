"""Persist rendered pages."""

import logging
from pathlib import Path

from lobsters_gopher.workflow.error_handling import WriteError

logger = logging.getLogger(__name__)

INDEX_FILENAME = "gophermap"


def write_output(directory: Path | str, name: str, text: str) -> Path:
    """Write text to `directory/name`, creating the directory if needed.

    Args:
        directory: Output directory
        name: File name (gophermap or <id>.txt)
        text: Rendered page

    Returns:
        Path of the written file

    Raises:
        WriteError: If the file cannot be written
    """
    path = Path(directory) / name
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise WriteError(f"Could not write {path}: {e}", path=str(path)) from e

    logger.info(f"Wrote {path}")
    return path
