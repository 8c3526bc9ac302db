import os
import shutil
from pathlib import Path
from typing import Callable, NamedTuple, Union

from shard_errors import CapacityError

GIB = 1024 ** 3

# A shard may not bring the output filesystem below this much free space
MIN_FREE_BYTES = 30_000_000_000


class DiskUsage(NamedTuple):
    total: int
    free: int


class CapacityReport(NamedTuple):
    predicted_free: int
    total: int

    @property
    def predicted_free_gib(self) -> float:
        return self.predicted_free / GIB

    @property
    def total_gib(self) -> float:
        return self.total / GIB


PathLike = Union[str, os.PathLike]
UsageFn = Callable[[PathLike], DiskUsage]


def statvfs_usage(path: PathLike) -> DiskUsage:
    """Total and free bytes of the filesystem holding path, from statvfs (POSIX)."""
    st = os.statvfs(path)
    return DiskUsage(total=st.f_blocks * st.f_frsize, free=st.f_bfree * st.f_frsize)


def shutil_usage(path: PathLike) -> DiskUsage:
    du = shutil.disk_usage(path)
    return DiskUsage(total=du.total, free=du.free)


def usage(path: PathLike) -> DiskUsage:
    if hasattr(os, "statvfs"):
        return statvfs_usage(path)
    return shutil_usage(path)


def check_capacity(total_bytes: int, path: PathLike, usage_fn: UsageFn = usage) -> CapacityReport:
    """
    Predict the free space left on path's filesystem once total_bytes are copied.

    Raises CapacityError when the prediction drops below MIN_FREE_BYTES.
    """
    try:
        disk = usage_fn(Path(path))
    except OSError as e:
        raise CapacityError(f"Failed to query disk usage of {path}: {e}") from e

    predicted_free = disk.free - total_bytes
    if predicted_free < MIN_FREE_BYTES:
        raise CapacityError(
            f"Shortage of disk capacity: {predicted_free / GIB:.2f}GB would remain free "
            f"after copying {total_bytes} bytes (need at least {MIN_FREE_BYTES / GIB:.2f}GB)."
        )
    return CapacityReport(predicted_free=predicted_free, total=disk.total)
