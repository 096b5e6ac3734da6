#  Copyright (c) espparttool contributors 2026-10-18.

class PartitionTableError(ValueError):
    pass


class ChecksumMismatchError(PartitionTableError):
    pass


class UnknownTypeError(PartitionTableError):
    pass


class UnknownSubtypeError(UnknownTypeError):
    pass


class MagicMismatchError(PartitionTableError):
    pass


class TableCapacityError(PartitionTableError):
    pass


class PartitionNotFoundError(PartitionTableError):
    pass
