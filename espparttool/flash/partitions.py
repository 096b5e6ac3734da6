#  Copyright (c) espparttool contributors 2026-10-18.

from typing import Iterable

from ..analysis.flash import DEFAULT_LAYOUT, TableLayout
from ..analysis.partitions import Partition, encode
from ..analysis.table import PartitionTable
from .interface import FlashInterface


def load_partitions(
    flash: FlashInterface,
    layout: TableLayout = DEFAULT_LAYOUT,
    strict: bool = False,
) -> PartitionTable:
    flash.info(f"Reading partition table at 0x{layout.offset:X}")
    data = flash.flash_read_bytes(layout.offset, layout.length)
    table = PartitionTable.from_bytes(data, strict=strict)
    flash.debug(f"Found {len(table)} partitions")
    return table


def write_partitions(
    flash: FlashInterface,
    partitions: Iterable[Partition],
    layout: TableLayout = DEFAULT_LAYOUT,
) -> None:
    # the table is always rewritten as a whole
    data = encode(partitions, length=layout.length)
    flash.info(f"Writing partition table at 0x{layout.offset:X}")
    flash.flash_write_bytes(layout.offset, data)
