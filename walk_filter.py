from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Pattern

from shard_errors import ConfigError, FilesystemError


@dataclass(frozen=True)
class FileEntry:
    path: Path
    size: int

    @property
    def extension(self) -> str:
        # Text from the last '.' of the basename, e.g. ".jpg"; "" if there is none
        return self.path.suffix


@dataclass
class WalkResult:
    entries: List[FileEntry] = field(default_factory=list)
    total_bytes: int = 0

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class NameFilter:
    """
    Prefix/suffix rules applied to a file's basename.

    The prefix pattern must match at the start of the name and the suffix
    pattern at its end. An absent pattern accepts every name.
    """

    prefix: Optional[Pattern[str]] = None
    suffix: Optional[Pattern[str]] = None

    @classmethod
    def compile(cls, prefix: str = "", suffix: str = "") -> "NameFilter":
        try:
            pre = re.compile(f"(?:{prefix})") if prefix else None
            suf = re.compile(f"(?:{suffix})\\Z") if suffix else None
        except re.error as e:
            raise ConfigError(f"Invalid prefix/suffix pattern: {e}") from e
        return cls(prefix=pre, suffix=suf)

    def accepts(self, name: str) -> bool:
        if self.prefix is not None and self.prefix.match(name) is None:
            return False
        if self.suffix is not None and self.suffix.search(name) is None:
            return False
        return True


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def _raise_walk_error(err: OSError) -> None:
    raise FilesystemError(f"Failed to read {err.filename}: {err.strerror or err}") from err


def walk_dataset(root: Path, name_filter: NameFilter, exclude: Iterable[Path] = ()) -> WalkResult:
    """
    Collect every regular file under root that passes the filters.

    Hidden files and directories (any path component below root starting with
    '.') are skipped, as are names rejected by name_filter. Paths in exclude
    (the output directory and text file of the run) are never collected, so a
    shard written inside the dataset directory is not copied into itself.

    Args:
        root: Dataset directory to scan recursively
        name_filter: Compiled prefix/suffix rules
        exclude: Files or directories to leave out

    Returns:
        WalkResult: accepted entries in traversal order and their total size in bytes
    """
    root = Path(root)
    if not root.is_dir():
        raise FilesystemError(f"Dataset directory does not exist or is not a directory: {root}")

    excluded = {Path(p).resolve() for p in exclude}
    result = WalkResult()
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        # Prune hidden directories in place so os.walk does not descend into them
        dirnames[:] = sorted(
            d for d in dirnames if not is_hidden(d) and (Path(dirpath) / d).resolve() not in excluded
        )

        for filename in sorted(filenames):
            if is_hidden(filename) or not name_filter.accepts(filename):
                continue
            path = Path(dirpath) / filename
            if excluded and path.resolve() in excluded:
                continue
            try:
                size = path.stat().st_size
            except OSError as e:
                raise FilesystemError(f"Failed to stat {path}: {e}") from e
            result.entries.append(FileEntry(path=path, size=size))
            result.total_bytes += size

    return result
