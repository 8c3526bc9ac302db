from pathlib import Path

import pytest

from disk_capacity import DiskUsage

TB = 10 ** 12


def make_file(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(bytes(i % 251 for i in range(size)))
    return path


@pytest.fixture
def plenty_of_space():
    def _usage(path):
        return DiskUsage(total=2 * TB, free=TB)

    return _usage


@pytest.fixture
def dataset(tmp_path):
    """a.jpg (10 bytes), .hidden/b.jpg (5 bytes), skip.txt (3 bytes)"""
    root = tmp_path / "data"
    make_file(root / "a.jpg", 10)
    make_file(root / ".hidden" / "b.jpg", 5)
    make_file(root / "skip.txt", 3)
    return root
