# ABOUTME: File helpers shared by the registry store and the format adapters
# ABOUTME: Writes go through a temp file + replace so readers never see partial output
import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json_document(path: Path) -> Any:
    """Read and parse a JSON file.

    ABOUTME: Lets FileNotFoundError, PermissionError, OSError and
    ABOUTME: json.JSONDecodeError propagate so callers can tag them

    Args:
        path: File to read

    Returns:
        Parsed JSON value (not necessarily an object)
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def dump_json(data: Any) -> str:
    """Serialize with 2-space indentation and a trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_text_atomic(path: Path, content: str) -> None:
    """Write text to path via a temp file in the same directory.

    ABOUTME: Creates parent directories if needed
    ABOUTME: Path.replace() is atomic on POSIX

    Raises:
        OSError: If the directory or file cannot be written
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=path.name + ".", dir=str(path.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        tmp_path.replace(path)
    finally:
        tmp_path.unlink(missing_ok=True)


def write_json_file(path: Path, data: dict[str, Any]) -> None:
    """Write JSON file atomically.

    ABOUTME: Key order of data is preserved (no sort_keys)
    """
    write_text_atomic(path, dump_json(data))
