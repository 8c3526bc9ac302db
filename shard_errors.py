from enum import IntEnum


class ExitCode(IntEnum):
    """
    Outcome of a make_shard run.

    A declined run is its own outcome but still exits the process with 0.
    """

    SUCCESS = 0
    DECLINED = 1
    CONFIG_ERROR = 2
    FILESYSTEM_ERROR = 3
    CAPACITY_ERROR = 4
    IO_ERROR = 5
    CLEANUP_ERROR = 6
    FAILURE = 7

    @property
    def status(self) -> int:
        """Process exit status for this outcome."""
        if self is ExitCode.DECLINED:
            return 0
        return int(self)


class ShardError(Exception):
    """Base class for every failure the shard pipeline reports."""

    exit_code = ExitCode.FAILURE


class ConfigError(ShardError):
    """Bad or missing manifest options, or the output directory could not be created."""

    exit_code = ExitCode.CONFIG_ERROR


class FilesystemError(ShardError):
    """The dataset tree could not be walked."""

    exit_code = ExitCode.FILESYSTEM_ERROR


class CapacityError(ShardError):
    """Copying would leave too little free space on the output filesystem."""

    exit_code = ExitCode.CAPACITY_ERROR


class ShardIOError(ShardError):
    """Reading a source file, writing a destination file or the manifest failed."""

    exit_code = ExitCode.IO_ERROR


class CleanupError(ShardError):
    """Removing the output directory or manifest after a failure failed."""

    exit_code = ExitCode.CLEANUP_ERROR
