#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dom/utils/io_utils.py
"""I/O helpers for reading markdown sources and writing generated scripts."""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from md2dom.exceptions import OutputWriteError


def read_text(source: Union[str, Path, IO[bytes], IO[str]]) -> str:
    """Read UTF-8 text from a path or a file-like object.

    Parameters
    ----------
    source : str, Path, IO[bytes] or IO[str]
        Path of the file or an open stream

    Returns
    -------
    str
        Decoded content (a leading BOM is dropped)

    """
    if isinstance(source, (str, Path)):
        return Path(source).read_text(encoding="utf-8-sig")

    data = source.read()
    if isinstance(data, bytes):
        return data.decode("utf-8-sig")
    return data


def _is_binary_stream(output: object) -> bool:
    if isinstance(output, BytesIO):
        return True
    if isinstance(output, StringIO):
        return False
    if isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(output, "mode", "")
    return isinstance(mode, str) and "b" in mode


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str], None]) -> Union[StringIO, None]:
    """Write text to an output destination or return it as a file-like object.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes], IO[str] or None
        - None: the content is returned as a StringIO
        - str or Path: the content is written to that file as UTF-8
        - a binary stream receives UTF-8 bytes, a text stream receives str

    Returns
    -------
    StringIO or None
        StringIO when ``output`` is None, otherwise None

    Raises
    ------
    OutputWriteError
        If the destination cannot be written
    TypeError
        If ``output`` is not a supported destination

    Examples
    --------
        >>> buffer = BytesIO()
        >>> write_content("let x;", buffer)
        >>> buffer.getvalue()
        b'let x;'

    """
    if output is None:
        return StringIO(content)

    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(
                f"Could not write output file: {output_path}", output_path=str(output_path), original_error=e
            ) from e
        return None

    if hasattr(output, "write"):
        try:
            if _is_binary_stream(output):
                cast(IO[bytes], output).write(content.encode("utf-8"))
            else:
                cast(IO[str], output).write(content)
        except OSError as e:
            raise OutputWriteError("Could not write to output stream", original_error=e) from e
        return None

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["read_text", "write_content"]
