from __future__ import annotations

import io
from pathlib import Path

import pytest

from entstats.errors import InputTooLargeError, MissingFileError
from entstats.io import read_input_file, read_input_stream


def test_read_input_file_returns_raw_bytes(tmp_path: Path) -> None:
    input_path = tmp_path / "data.bin"
    input_path.write_bytes(b"\x00\x01\xfe\xff\r\n")

    data = read_input_file(input_path)

    assert data.data == b"\x00\x01\xfe\xff\r\n"
    assert data.byte_count == 6
    assert data.path == input_path.resolve()


def test_read_input_file_accepts_string_paths(tmp_path: Path) -> None:
    input_path = tmp_path / "data.bin"
    input_path.write_bytes(b"abc")

    assert read_input_file(str(input_path)).data == b"abc"


def test_read_input_file_allows_empty_files(tmp_path: Path) -> None:
    input_path = tmp_path / "empty.bin"
    input_path.write_bytes(b"")

    assert read_input_file(input_path).byte_count == 0


def test_read_input_file_missing(tmp_path: Path) -> None:
    with pytest.raises(MissingFileError):
        read_input_file(tmp_path / "absent.bin")


def test_read_input_file_rejects_directories(tmp_path: Path) -> None:
    with pytest.raises(MissingFileError):
        read_input_file(tmp_path)


def test_read_input_file_enforces_max_bytes(tmp_path: Path) -> None:
    input_path = tmp_path / "data.bin"
    input_path.write_bytes(b"x" * 10)

    with pytest.raises(InputTooLargeError):
        read_input_file(input_path, max_bytes=9)
    assert read_input_file(input_path, max_bytes=None).byte_count == 10


def test_read_input_stream() -> None:
    data = read_input_stream(io.BytesIO(b"stream"), max_bytes=6)

    assert data.data == b"stream"
    assert str(data.path) == "-"
    with pytest.raises(InputTooLargeError):
        read_input_stream(io.BytesIO(b"stream"), max_bytes=5)
