import shutil

from shard_config import ShardConfig
from shard_errors import CleanupError


def cleanup_outputs(config: ShardConfig) -> None:
    """
    Remove the output directory tree and, in manifest mode, the manifest file.

    Artifacts that do not exist are skipped, so calling this twice is harmless.
    """
    output_dir = config.output_dir
    try:
        if output_dir.is_dir() and not output_dir.is_symlink():
            shutil.rmtree(output_dir)
        elif output_dir.exists() or output_dir.is_symlink():
            output_dir.unlink()
    except OSError as e:
        raise CleanupError(f"Failed to remove output directory {output_dir}: {e}") from e

    manifest_path = config.manifest_path
    if manifest_path is None:
        return
    try:
        if manifest_path.exists():
            manifest_path.unlink()
    except OSError as e:
        raise CleanupError(f"Failed to remove text file {manifest_path}: {e}") from e
