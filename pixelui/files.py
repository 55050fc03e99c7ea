"""File name extension helpers and directory listing for file choosers."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

LEN_FILE_EXTENSION_MAX = 5
"""Longest extension handled, including the dot."""

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def get_file_extension(
    filename: str, size: int = 0, ext_max_len: int = 0
) -> str | None:
    """Return the extension (with its dot) of the first ``size`` characters of ``filename``.

    ``size`` of zero means the whole name; ``ext_max_len`` of zero means
    ``LEN_FILE_EXTENSION_MAX``. Returns ``None`` when no dot is found within
    the last ``ext_max_len`` characters.
    """
    text = filename[:size] if size else filename
    length = len(text)
    max_len = ext_max_len or LEN_FILE_EXTENSION_MAX
    i = length - 1
    while i >= 0 and length - i <= max_len:
        if text[i] == ".":
            return text[i:]
        i -= 1
    return None


def is_extension_matching(extension: str, pattern: str) -> bool:
    """Whether ``extension`` is one of the extensions concatenated in ``pattern``.

    ``pattern`` looks like ``".gif.jpg.jpeg.png"`` and is searched from the end.
    The comparison ignores ASCII case.
    """
    ext = get_file_extension(pattern)
    remaining = len(pattern)
    while remaining > 0 and ext:
        ext_len = len(ext)
        if (
            extension[:ext_len].translate(_ASCII_LOWER)
            == ext.translate(_ASCII_LOWER)
        ):
            return True
        remaining -= ext_len
        if remaining > 0:
            ext = get_file_extension(pattern, remaining)
    return False


def nocase_key(name: str) -> str:
    """Sort key ordering names without regard to ASCII case."""
    return name.translate(_ASCII_LOWER)


@dataclass(frozen=True)
class DirEntry:
    """One item of a directory listing."""

    name: str
    is_dir: bool
    is_hidden: bool = False
    is_system: bool = False


def _is_root(path: str | os.PathLike) -> bool:
    resolved = Path(path).resolve()
    return resolved.parent == resolved


def _entry(item: os.DirEntry) -> DirEntry:
    try:
        attrs = getattr(item.stat(follow_symlinks=False), "st_file_attributes", 0)
    except OSError:
        attrs = 0
    return DirEntry(
        name=item.name,
        is_dir=item.is_dir(),
        is_hidden=item.name.startswith(".")
        or bool(attrs & stat.FILE_ATTRIBUTE_HIDDEN),
        is_system=bool(attrs & stat.FILE_ATTRIBUTE_SYSTEM),
    )


def iter_dir(
    path: str | os.PathLike, at_root: bool | None = None
) -> Iterator[DirEntry]:
    """Yield the entries of ``path``, led by a ``..`` entry unless it is a root.

    When ``at_root`` is ``None`` it is worked out from the path itself.
    """
    if at_root is None:
        at_root = _is_root(path)
    with os.scandir(path) as items:
        if not at_root:
            yield DirEntry("..", is_dir=True)
        for item in items:
            yield _entry(item)


def list_matching_files(
    folder: str | os.PathLike,
    extension: str | None,
    maxlen: int,
    strip_extension: bool = False,
) -> list[str]:
    """List the plain files of ``folder`` offered by a file chooser.

    Directories, hidden and system files are left out, as are files whose
    extension is not in ``extension`` (when given) and names that are empty or
    longer than ``maxlen`` after the optional stripping of the extension.
    Duplicates are dropped and the result is sorted without regard to case.
    A folder that cannot be read yields the files gathered so far.
    """
    files: list[str] = []
    try:
        for entry in iter_dir(folder):
            if entry.is_dir or entry.is_hidden or entry.is_system:
                continue
            ext = get_file_extension(entry.name)
            if extension and (ext is None or not is_extension_matching(ext, extension)):
                continue
            length = len(entry.name)
            if strip_extension and ext:
                length -= len(ext)
            if not length or length > maxlen:
                continue
            name = entry.name[:length]
            if name not in files:
                files.append(name)
    except OSError:
        pass
    files.sort(key=nocase_key)
    return files