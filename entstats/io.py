"""Input helpers for loading binary data into memory."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import BinaryIO

from .errors import InputTooLargeError, MissingFileError

DEFAULT_MAX_BYTES = 100 * 1024 * 1024

STDIN_LABEL = "-"


@dataclass(frozen=True)
class InputData:
    """Container describing the data loaded from an input file."""

    data: bytes
    path: Path

    @property
    def byte_count(self) -> int:
        return len(self.data)


def read_input_file(path: Path | str, *, max_bytes: int | None = DEFAULT_MAX_BYTES) -> InputData:
    """Read the whole of ``path`` in binary mode."""

    candidate = _normalise_path(path)
    if not candidate.is_file():
        raise MissingFileError(f"Input file not found: {candidate}")
    if max_bytes is not None:
        size = candidate.stat().st_size
        if size > max_bytes:
            raise InputTooLargeError(
                f"Input file '{candidate}' has {size} bytes, exceeding the allowed maximum of {max_bytes}."
            )
    try:
        data = candidate.read_bytes()
    except OSError as exc:  # pragma: no cover - filesystem guard
        raise MissingFileError(f"Could not read input file: {candidate}") from exc
    return InputData(data=data, path=candidate)


def read_input_stream(
    stream: BinaryIO, *, max_bytes: int | None = DEFAULT_MAX_BYTES, label: str = STDIN_LABEL
) -> InputData:
    """Read ``stream`` to the end, refusing more than ``max_bytes``."""

    if max_bytes is None:
        data = stream.read()
    else:
        data = stream.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise InputTooLargeError(
                f"Input stream exceeds the allowed maximum of {max_bytes} bytes."
            )
    return InputData(data=bytes(data), path=Path(label))


def _normalise_path(path: Path | str) -> Path:
    if isinstance(path, str) and re.match(r"^[A-Za-z]:\\", path):
        return Path(PureWindowsPath(path))
    candidate = path if isinstance(path, Path) else Path(path)
    return candidate.expanduser().resolve()


__all__ = [
    "DEFAULT_MAX_BYTES",
    "InputData",
    "STDIN_LABEL",
    "read_input_file",
    "read_input_stream",
]
