import os

import pytest

from conftest import make_file
from shard_errors import ConfigError, FilesystemError
from walk_filter import FileEntry, NameFilter, walk_dataset


def test_skips_hidden_files_and_directories(tmp_path):
    make_file(tmp_path / "a.jpg", 4)
    make_file(tmp_path / ".b.jpg", 4)
    make_file(tmp_path / ".cache" / "c.jpg", 4)
    make_file(tmp_path / "sub" / ".git" / "d.jpg", 4)
    make_file(tmp_path / "sub" / "e.png", 6)

    result = walk_dataset(tmp_path, NameFilter.compile())

    names = sorted(e.path.name for e in result.entries)
    assert names == ["a.jpg", "e.png"]
    assert result.total_bytes == 10
    assert len(result) == 2


def test_prefix_and_suffix_filters(dataset):
    result = walk_dataset(dataset, NameFilter.compile(prefix="a", suffix="jpg"))

    assert [e.path.name for e in result.entries] == ["a.jpg"]
    assert result.total_bytes == 10


def test_prefix_is_anchored_at_start_and_suffix_at_end():
    name_filter = NameFilter.compile(prefix="img", suffix=r"\.png")

    assert name_filter.accepts("img_001.png")
    assert not name_filter.accepts("my_img_001.png")
    assert not name_filter.accepts("img_001.png.bak")


def test_alternation_stays_anchored():
    name_filter = NameFilter.compile(prefix="cat|dog")

    assert name_filter.accepts("dog_1.jpg")
    assert not name_filter.accepts("hotdog_1.jpg")


def test_no_filters_accept_everything():
    assert NameFilter.compile().accepts("anything.bin")


def test_invalid_pattern_is_config_error():
    with pytest.raises(ConfigError):
        NameFilter.compile(prefix="[unclosed")


def test_excluded_output_directory_is_not_walked(tmp_path):
    make_file(tmp_path / "a.jpg", 3)
    make_file(tmp_path / "output" / "0.jpg", 3)
    make_file(tmp_path / "labels.txt", 3)

    result = walk_dataset(
        tmp_path, NameFilter.compile(), exclude=[tmp_path / "output", tmp_path / "labels.txt"]
    )

    assert [e.path.name for e in result.entries] == ["a.jpg"]


def test_missing_root_is_filesystem_error(tmp_path):
    with pytest.raises(FilesystemError):
        walk_dataset(tmp_path / "nope", NameFilter.compile())


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
def test_unreadable_directory_is_filesystem_error(tmp_path):
    locked = tmp_path / "locked"
    make_file(locked / "a.jpg", 3)
    locked.chmod(0o000)
    try:
        with pytest.raises(FilesystemError):
            walk_dataset(tmp_path, NameFilter.compile())
    finally:
        locked.chmod(0o755)


def test_file_entry_extension(tmp_path):
    assert FileEntry(tmp_path / "x.tar.gz", 1).extension == ".gz"
    assert FileEntry(tmp_path / "README", 1).extension == ""
