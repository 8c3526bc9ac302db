from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from shard_errors import ConfigError


@dataclass
class ShardConfig:
    """
    Options of a single make_shard run.

    When make_txt is set, every copied file gets a line "<destination> <label>"
    in the text file txt_fname.
    """

    output: str = "output"
    datadir: str = "./"
    make_txt: bool = False
    label: str = ""
    txt_fname: str = ""
    prefix: str = ""
    suffix: str = ""
    seed: Optional[int] = None
    confirm_timeout: Optional[float] = None

    @property
    def output_dir(self) -> Path:
        return Path(self.output)

    @property
    def manifest_path(self) -> Optional[Path]:
        if not self.make_txt:
            return None
        return Path(self.txt_fname)

    def validate(self) -> None:
        if self.make_txt and (not self.label or not self.txt_fname):
            raise ConfigError("Label or text file name is not defined.")
        if self.confirm_timeout is not None and self.confirm_timeout <= 0:
            raise ConfigError(f"Confirmation timeout must be positive, got {self.confirm_timeout}")
        if self.seed is not None and self.seed < 0:
            raise ConfigError(f"Seed must be a non-negative integer, got {self.seed}")
        output_dir = Path(self.output).resolve()
        data_dir = Path(self.datadir).resolve()
        if output_dir == data_dir or output_dir in data_dir.parents:
            raise ConfigError(
                f"Output directory {output_dir} must not be the dataset directory or contain it"
            )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Copy the files of a dataset directory into an output directory under "
            "shuffled sequential names, optionally writing a label text file."
        )
    )
    parser.add_argument("-o", "--output", type=str, default="output", help="Output dir (default: output)")
    parser.add_argument("-d", "--datadir", type=str, default="./", help="Directory of datasets (default: ./)")
    parser.add_argument(
        "-t",
        "--txt",
        dest="make_txt",
        action="store_true",
        help="Write a summary text file of '<output path> <label>' lines",
    )
    parser.add_argument("-l", "--label", type=str, default="", help="Label of the dataset")
    parser.add_argument("-f", "--txtfname", dest="txt_fname", type=str, default="", help="The name of the text file")
    parser.add_argument("-p", "--prefix", type=str, default="", help="Prefix regex the file names must start with")
    parser.add_argument("-s", "--suffix", type=str, default="", help="Suffix regex the file names must end with")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the shuffle (default: current time)",
    )
    parser.add_argument(
        "--confirm-timeout",
        dest="confirm_timeout",
        type=float,
        default=None,
        help="Seconds to wait for the confirmation answer before declining (default: wait forever)",
    )
    return parser


def parse_config(argv: Optional[List[str]] = None) -> ShardConfig:
    """Parse command-line arguments into a ShardConfig (not yet validated)."""
    args = build_parser().parse_args(argv)
    return ShardConfig(
        output=args.output,
        datadir=args.datadir,
        make_txt=args.make_txt,
        label=args.label,
        txt_fname=args.txt_fname,
        prefix=args.prefix,
        suffix=args.suffix,
        seed=args.seed,
        confirm_timeout=args.confirm_timeout,
    )


def prepare_output_dir(config: ShardConfig) -> Path:
    """
    Create the output directory (and parents) if it does not exist yet.

    Returns:
        Path: the output directory
    """
    output_dir = config.output_dir
    if output_dir.exists() and not output_dir.is_dir():
        raise ConfigError(f"Output path exists and is not a directory: {output_dir}")
    try:
        output_dir.mkdir(mode=0o777, parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Failed to create output directory {output_dir}: {e}") from e
    return output_dir
