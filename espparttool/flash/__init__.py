#  Copyright (c) espparttool contributors 2026-10-18.

from .dump import DumpFileFlash
from .interface import FlashInterface
from .partitions import load_partitions, write_partitions

__all__ = [
    "DumpFileFlash",
    "FlashInterface",
    "load_partitions",
    "write_partitions",
]
