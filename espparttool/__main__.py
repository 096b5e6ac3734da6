import argparse
import json
import logging
import sys
from dataclasses import asdict

from espparttool.analysis import flash
from espparttool.analysis.partitions import Partition
from espparttool.analysis.registry import SUBTYPES, TYPES
from espparttool.analysis.table import DEFAULT_PARTITION_SIZE
from espparttool.flash import DumpFileFlash, load_partitions, write_partitions


def __int(value: str) -> int:
    return int(value, 0)


def __add_file_args(parser: argparse.ArgumentParser):
    parser.add_argument("file", help="Flash dump or partition table file")
    parser.add_argument(
        "-l",
        "--layout",
        default="flash",
        choices=list(flash.TABLE_LAYOUTS),
        help="Where the table is in the file: 'flash' for full flash dumps (0x8000), "
        "'bin' for bare partition table files (default: flash)",
    )
    parser.add_argument(
        "-s",
        "--start",
        type=__int,
        help="Override the partition table offset [dec/hex]",
    )
    return parser


def __get_layout(args) -> flash.TableLayout:
    layout = flash.TABLE_LAYOUTS[args.layout]
    if args.start is not None:
        layout = flash.TableLayout(name=layout.name, offset=args.start, length=layout.length)
    return layout


def __partition_args(parser: argparse.ArgumentParser, required: bool):
    prefix = "" if required else "--"
    parser.add_argument(
        f"{prefix}type",
        choices=list(TYPES),
        help="Partition type",
    )
    parser.add_argument(
        f"{prefix}subtype",
        choices=sorted({name for subtypes in SUBTYPES.values() for name in subtypes}),
        help="Partition subtype (must be valid for the type)",
    )
    if required:
        parser.add_argument(
            "offset",
            nargs="?",
            type=__int,
            help="Partition offset [dec/hex] (default: end of the last partition)",
        )
        parser.add_argument(
            "size",
            nargs="?",
            type=__int,
            help=f"Partition size [dec/hex] (default: 0x{DEFAULT_PARTITION_SIZE:X})",
        )
    else:
        parser.add_argument("--offset", type=__int, help="Partition offset [dec/hex]")
        parser.add_argument("--size", type=__int, help="Partition size [dec/hex]")
    parser.add_argument(
        "--flags",
        type=__int,
        default=0 if required else None,
        help="Partition flags [dec/hex] (default: 0)",
    )


def show_table(args):
    layout = __get_layout(args)
    device = DumpFileFlash(args.file, debug=args.debug)
    table = load_partitions(device, layout, strict=args.strict)
    print(f"Partition table at 0x{layout.offset:X} - {len(table)} partitions:")
    if table:
        print(table)


def add_partition(args):
    layout = __get_layout(args)
    device = DumpFileFlash(args.file, debug=args.debug)
    table = load_partitions(device, layout)
    partition = table.add(
        Partition(
            type=args.type,
            subtype=args.subtype,
            offset=table.next_offset() if args.offset is None else args.offset,
            size=DEFAULT_PARTITION_SIZE if args.size is None else args.size,
            name=args.name,
            flags=args.flags,
        ),
        length=layout.length,
    )
    write_partitions(device, table, layout)
    print(f"Added {partition}")


def remove_partition(args):
    layout = __get_layout(args)
    device = DumpFileFlash(args.file, debug=args.debug)
    table = load_partitions(device, layout)
    partition = table.remove(args.name)
    write_partitions(device, table, layout)
    print(f"Removed {partition}")


def update_partition(args):
    layout = __get_layout(args)
    device = DumpFileFlash(args.file, debug=args.debug)
    table = load_partitions(device, layout)
    changes = {
        key: getattr(args, key)
        for key in ("type", "subtype", "offset", "size", "flags")
        if getattr(args, key) is not None
    }
    if args.new_name is not None:
        changes["name"] = args.new_name
    if not changes:
        print("Nothing to update")
        return
    partition = table.update(args.name, **changes)
    write_partitions(device, table, layout)
    print(f"Updated {partition}")


def export_table(args):
    layout = __get_layout(args)
    device = DumpFileFlash(args.file, debug=args.debug)
    table = load_partitions(device, layout)
    data = json.dumps([asdict(p) for p in table], indent="\t")
    if not args.output:
        print(data)
        return
    with open(args.output, "w") as f:
        f.write(data)
    print(f"Exported {len(table)} partitions to {args.output}")


def import_table(args):
    layout = __get_layout(args)
    with open(args.json) as f:
        items = json.load(f)
    if not isinstance(items, list):
        raise ValueError(f"{args.json} does not contain a list of partitions")
    try:
        partitions = [Partition(**item) for item in items]
    except TypeError as e:
        raise ValueError(f"Invalid partition entry in {args.json}: {e}") from None
    device = DumpFileFlash(args.file, create=True, debug=args.debug)
    write_partitions(device, partitions, layout)
    print(f"Imported {len(partitions)} partitions to {args.file}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="espparttool",
        description="Read and modify ESP32 partition tables in flash dumps and partition table files",
    )
    parser.add_argument(
        "-D",
        "--debug",
        action="store_true",
        default=False,
        help="Print debugging information (default: False)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="subcommand to execute")

    parser_show = subparsers.add_parser("show", help="Show the partition table")
    parser_show = __add_file_args(parser_show)
    parser_show.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Fail on partition entries with invalid magic bytes (default: False)",
    )
    parser_show.set_defaults(handler=show_table)

    parser_add = subparsers.add_parser("add", help="Add a partition to the table")
    parser_add = __add_file_args(parser_add)
    parser_add.add_argument("name", help="Partition name (max. 16 bytes, longer names are truncated)")
    __partition_args(parser_add, required=True)
    parser_add.set_defaults(handler=add_partition)

    parser_remove = subparsers.add_parser("remove", help="Remove a partition from the table")
    parser_remove = __add_file_args(parser_remove)
    parser_remove.add_argument("name", help="Name of the partition to remove")
    parser_remove.set_defaults(handler=remove_partition)

    parser_update = subparsers.add_parser("update", help="Change a partition in the table")
    parser_update = __add_file_args(parser_update)
    parser_update.add_argument("name", help="Name of the partition to change")
    parser_update.add_argument("--name", dest="new_name", help="New partition name")
    __partition_args(parser_update, required=False)
    parser_update.set_defaults(handler=update_partition)

    parser_export = subparsers.add_parser("export", help="Export the partition table as JSON")
    parser_export = __add_file_args(parser_export)
    parser_export.add_argument("-o", "--output", default="", help="Output JSON file (default: stdout)")
    parser_export.set_defaults(handler=export_table)

    parser_import = subparsers.add_parser("import", help="Replace the partition table with partitions from a JSON file")
    parser_import = __add_file_args(parser_import)
    parser_import.add_argument("json", help="JSON file with a list of partitions")
    parser_import.set_defaults(handler=import_table)

    return parser.parse_args(argv)


def cli(argv=None) -> int:
    args = parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    try:
        args.handler(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(cli())
