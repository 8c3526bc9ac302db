"""
Build a shuffled dataset shard.

Walks a dataset directory, keeps the files that pass the hidden/prefix/suffix
filters, checks the output filesystem keeps enough free space, asks for
confirmation and copies every file to <output>/<shuffled index><ext>. With
--txt a text file of "<destination> <label>" lines is written alongside.

Example:
    python make_shard.py -d ./data/cats -o shard_cats -t -l cat -f cats.txt -s jpg
"""

import sys
from typing import List, Optional, TextIO

from cleanup import cleanup_outputs
from confirm import capacity_message, confirm
from disk_capacity import UsageFn, check_capacity, usage
from shard_config import ShardConfig, parse_config, prepare_output_dir
from shard_errors import ConfigError, ExitCode, ShardError
from shuffle_copy import copy_entries, make_rng, shuffled_indices
from walk_filter import NameFilter, walk_dataset


def _cleanup(config: ShardConfig, err: TextIO) -> Optional[ExitCode]:
    """Remove this run's outputs; returns CLEANUP_ERROR if that fails."""
    try:
        cleanup_outputs(config)
    except ShardError as e:
        print(f"Error: {e}", file=err)
        return e.exit_code
    return None


def run(
    config: ShardConfig,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    usage_fn: Optional[UsageFn] = None,
) -> ExitCode:
    """
    Run the whole pipeline once and return its exit code.

    Nothing is retried. A failure after the output directory was created, or a
    declined confirmation, removes the output directory and text file again.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    usage_fn = usage_fn or usage

    # Validate: nothing of this run exists on disk yet, so there is nothing to clean up
    try:
        config.validate()
        name_filter = NameFilter.compile(config.prefix, config.suffix)
        rng = make_rng(config.seed)
        output_dir = prepare_output_dir(config)
    except ConfigError as e:
        print(f"Error: {e}", file=stderr)
        return e.exit_code

    print("=" * 80, file=stdout)
    print(f"Dataset directory: {config.datadir}", file=stdout)
    print(f"Output directory:  {output_dir.absolute()}", file=stdout)
    if config.make_txt:
        print(f"Text file:         {config.txt_fname} (label: {config.label})", file=stdout)
    print("=" * 80, file=stdout)

    try:
        exclude = [output_dir]
        if config.manifest_path is not None:
            exclude.append(config.manifest_path)
        walked = walk_dataset(config.datadir, name_filter, exclude)
        report = check_capacity(walked.total_bytes, output_dir, usage_fn)

        message = capacity_message(report.predicted_free_gib, report.total_gib, len(walked))
        if not confirm(message, stdin, stdout, config.confirm_timeout):
            print("Aborted. Removing output.", file=stdout)
            return _cleanup(config, stderr) or ExitCode.DECLINED

        indices = shuffled_indices(len(walked), rng)
        written = copy_entries(walked.entries, indices, config, err=stderr, out=stdout)
    except ShardError as e:
        print(f"Error: {e}", file=stderr)
        return _cleanup(config, stderr) or e.exit_code

    print(f"Copied {len(written)} files to '{output_dir.absolute()}'.", file=stdout)
    if config.make_txt:
        print(f"Text file written to '{config.txt_fname}'.", file=stdout)
    return ExitCode.SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_config(argv)
    return run(config).status


if __name__ == "__main__":
    sys.exit(main())
