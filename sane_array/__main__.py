"""CLI entry point: python -m sane_array <command>"""

import argparse
import sys
from pathlib import Path

import numpy as np

from .data import DataType
from .errors import SaneError, UnsupportedDataType


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="sane",
        description="Inspect and convert SANE array files",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- info ---
    info_parser = subparsers.add_parser("info", help="List the records of a SANE file")
    info_parser.add_argument("input", type=str, help="SANE file")

    # --- pack ---
    pack_parser = subparsers.add_parser("pack", help="Concatenate .npy arrays into a SANE file")
    pack_parser.add_argument("inputs", type=str, nargs="+", help="Input .npy files")
    pack_parser.add_argument("-o", "--output", type=str, required=True, help="Output SANE file")

    # --- unpack ---
    unpack_parser = subparsers.add_parser("unpack", help="Write each record of a SANE file to .npy")
    unpack_parser.add_argument("input", type=str, help="SANE file")
    unpack_parser.add_argument("-o", "--output", type=str, required=True,
                               help="Output directory")

    # --- examples ---
    examples_parser = subparsers.add_parser("examples", help="Write the reference fixture files")
    examples_parser.add_argument("directory", type=str, help="Output directory")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": _cmd_info,
        "pack": _cmd_pack,
        "unpack": _cmd_unpack,
        "examples": _cmd_examples,
    }
    from .cli_formatting import print_error
    try:
        commands[args.command](args)
    except (SaneError, OSError, ValueError) as exc:
        print_error(str(exc))
        return 1
    return 0


def _cmd_info(args):
    from .cli_formatting import print_records
    from .stream import iter_headers

    path = Path(args.input)
    with open(path, "rb") as f:
        headers = list(iter_headers(f))
    print_records(path.name, headers, path.stat().st_size)


def _cmd_pack(args):
    from .cli_formatting import print_written
    from .stream import write_sane_many

    arrays = [np.load(p, allow_pickle=False) for p in args.inputs]
    # Reject unsupported dtypes before the output file is created.
    for path, array in zip(args.inputs, arrays):
        try:
            DataType.from_dtype(array.dtype)
        except UnsupportedDataType as exc:
            raise ValueError(f"{path}: {exc}") from exc
    with open(args.output, "wb") as f:
        write_sane_many(f, arrays)
    print_written([(f"{len(arrays)} record(s)", args.output)])


def _cmd_unpack(args):
    from .cli_formatting import print_written
    from .stream import iter_sane

    out_dir = Path(args.output)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    with open(args.input, "rb") as f:
        for i, value in enumerate(iter_sane(f)):
            path = out_dir / f"{i}.npy"
            np.save(path, value.array)
            written.append((value.data_type.name.lower(), path))
    print_written(written)


def _cmd_examples(args):
    from .cli_formatting import print_written
    from .examples import write_examples

    paths = write_examples(args.directory)
    print_written(sorted(paths.items()))


if __name__ == "__main__":
    sys.exit(main())
