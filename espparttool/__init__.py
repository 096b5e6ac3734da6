from .analysis import (
    ChecksumMismatchError,
    Partition,
    PartitionTable,
    PartitionTableError,
    decode,
    encode,
)
from .flash import DumpFileFlash, FlashInterface, load_partitions, write_partitions

__all__ = [
    "ChecksumMismatchError",
    "DumpFileFlash",
    "FlashInterface",
    "Partition",
    "PartitionTable",
    "PartitionTableError",
    "decode",
    "encode",
    "load_partitions",
    "write_partitions",
]
