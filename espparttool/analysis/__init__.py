from .errors import (
    ChecksumMismatchError,
    MagicMismatchError,
    PartitionNotFoundError,
    PartitionTableError,
    TableCapacityError,
    UnknownSubtypeError,
    UnknownTypeError,
)
from .flash import DEFAULT_LAYOUT, TABLE_LAYOUTS, TABLE_LENGTH, TABLE_OFFSET, TableLayout
from .partitions import (
    CHECKSUM_MARKER,
    NAME_LENGTH,
    PARTITION_MAGIC,
    SLOT_SIZE,
    Partition,
    decode,
    encode,
)
from .registry import (
    SUBTYPE_NAMES,
    SUBTYPES,
    TYPE_NAMES,
    TYPES,
    AppSubtype,
    DataSubtype,
    PartitionType,
)
from .table import PartitionTable

__all__ = [
    "AppSubtype",
    "CHECKSUM_MARKER",
    "ChecksumMismatchError",
    "DEFAULT_LAYOUT",
    "DataSubtype",
    "MagicMismatchError",
    "NAME_LENGTH",
    "PARTITION_MAGIC",
    "Partition",
    "PartitionNotFoundError",
    "PartitionTable",
    "PartitionTableError",
    "PartitionType",
    "SLOT_SIZE",
    "SUBTYPES",
    "SUBTYPE_NAMES",
    "TABLE_LAYOUTS",
    "TABLE_LENGTH",
    "TABLE_OFFSET",
    "TYPES",
    "TYPE_NAMES",
    "TableCapacityError",
    "TableLayout",
    "UnknownSubtypeError",
    "UnknownTypeError",
    "decode",
    "encode",
]
