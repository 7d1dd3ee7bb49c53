"""Binary sniffing and streaming line/character counts."""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Optional, Union

from ..logging_config import get_logger
from ..models import TextMetrics

logger = get_logger(__name__)

SNIFF_BYTES = 8192
CHUNK_CHARS = 64 * 1024

PathLike = Union[str, Path]


class FileKind(enum.Enum):
    TEXT = "text"
    BINARY = "binary"
    UNREADABLE = "unreadable"


def classify(path: PathLike) -> FileKind:
    """Null byte in the first 8 KiB means binary.

    A heuristic: exotic encodings (UTF-16 text, say) may be misclassified.
    """
    try:
        with open(path, "rb") as f:
            head = f.read(SNIFF_BYTES)
    except OSError as e:
        logger.debug("Cannot sniff %s: %s", path, e)
        return FileKind.UNREADABLE
    if b"\x00" in head:
        return FileKind.BINARY
    return FileKind.TEXT


def measure(path: PathLike) -> Optional[TextMetrics]:
    """Count decoded characters and logical lines.

    ``\\n``, a lone ``\\r`` and ``\\r\\n`` each end one line. A trailing
    partial line counts. Returns ``None`` if the file cannot be read.
    """
    chars = 0
    terminators = 0
    pending_cr = False
    last_char = ""

    try:
        # newline="" keeps \r and \r\n untranslated
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            while True:
                chunk = f.read(CHUNK_CHARS)
                if not chunk:
                    break
                if pending_cr and chunk[0] == "\n":
                    # \r\n split across chunks: both halves were counted
                    terminators -= 1
                chars += len(chunk)
                terminators += chunk.count("\n") + chunk.count("\r") - chunk.count("\r\n")
                pending_cr = chunk[-1] == "\r"
                last_char = chunk[-1]
    except OSError as e:
        logger.debug("Cannot measure %s: %s", path, e)
        return None

    lines = terminators
    if chars and last_char not in ("\n", "\r"):
        lines += 1
    return TextMetrics(lines=lines, chars=chars)
