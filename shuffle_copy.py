from __future__ import annotations

import shutil
import sys
import time
from pathlib import Path
from typing import List, Optional, TextIO

import numpy as np
from tqdm import tqdm

from shard_config import ShardConfig
from shard_errors import ShardIOError
from walk_filter import FileEntry


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Random source for one run, seeded from the current time unless a seed is given."""
    if seed is None:
        seed = time.time_ns()
    return np.random.default_rng(seed)


def shuffled_indices(n: int, rng: np.random.Generator) -> np.ndarray:
    """
    Return the integers 0..n-1 in a uniformly random order (Fisher-Yates).

    Args:
        n: Number of indices
        rng: Random source of the current run

    Returns:
        np.ndarray: int64 array that is a permutation of range(n)
    """
    indices = np.arange(n, dtype=np.int64)
    for i in range(n):
        j = int(rng.integers(0, i + 1))
        indices[i], indices[j] = indices[j], indices[i]
    return indices


def destination_path(index: int, output_dir: Path, source: Path) -> Path:
    """<absolute output dir>/<index><source extension>"""
    return Path(output_dir).absolute() / f"{index}{Path(source).suffix}"


def copy_file(src: Path, dst: Path) -> None:
    # Contents only; permissions and timestamps are not carried over
    shutil.copyfile(src, dst)


def manifest_line(dst: Path, label: str) -> str:
    return f"{dst} {label}\n"


def copy_entries(
    entries: List[FileEntry],
    indices: np.ndarray,
    config: ShardConfig,
    err: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
) -> List[Path]:
    """
    Copy each entry to its shuffled destination name inside config.output.

    The entry at position i is copied to destination_path(indices[i], ...).
    In manifest mode the manifest line of a file is written before the file
    itself is copied. The first failure aborts the whole copy.

    Returns:
        List[Path]: destination paths in the order they were written
    """
    err = err or sys.stderr
    out = out or sys.stdout
    if len(indices) != len(entries):
        raise ValueError(f"Got {len(indices)} indices for {len(entries)} files")

    manifest = None
    written: List[Path] = []
    try:
        if config.make_txt:
            manifest = open(config.manifest_path, "w", encoding="utf-8")

        # Percentage on stderr, redrawn after every file
        with tqdm(
            total=len(entries), file=err, bar_format="{percentage:.1f}%...", mininterval=0, miniters=1
        ) as progress:
            for i, entry in enumerate(entries):
                dst = destination_path(int(indices[i]), config.output_dir, entry.path)
                if manifest is not None:
                    manifest.write(manifest_line(dst, config.label))
                copy_file(entry.path, dst)
                written.append(dst)
                progress.update(1)
    except OSError as e:
        raise ShardIOError(f"Failed to copy dataset files: {e}") from e
    finally:
        if manifest is not None:
            manifest.close()

    print(file=out)
    return written
