from dataclasses import replace
from typing import List, Optional

from .errors import PartitionNotFoundError, PartitionTableError, TableCapacityError
from .flash import TABLE_LENGTH
from .partitions import SLOT_SIZE, Partition, decode, encode
from .registry import SUBTYPES

# first free address after the bootloader and the partition table
FIRST_PARTITION_OFFSET = 0x9000
DEFAULT_PARTITION_SIZE = 0x1000


def _human(size: int) -> str:
    if size < 0x400:
        return f"{size} B"
    if size < 0x100000:
        return f"{size / 0x400:.1f} KiB"
    return f"{size / 0x100000:.1f} MiB"


class PartitionTable(List[Partition]):
    @classmethod
    def from_bytes(cls, data: bytes, strict: bool = False) -> "PartitionTable":
        return cls(decode(data, strict=strict))

    def to_bytes(self, length: int = TABLE_LENGTH) -> bytes:
        return encode(self, length=length)

    def find(self, name: str) -> Optional[Partition]:
        return next((p for p in self if p.name == name), None)

    def by_name(self, name: str) -> Partition:
        partition = self.find(name)
        if partition is None:
            raise PartitionNotFoundError(f"Partition '{name}' not found")
        return partition

    def next_offset(self) -> int:
        if not self:
            return FIRST_PARTITION_OFFSET
        return self[-1].end

    def add(self, partition: Partition, length: int = TABLE_LENGTH) -> Partition:
        partition.validate()
        if self.find(partition.name) is not None:
            raise PartitionTableError(f"Partition '{partition.name}' already exists")
        # one slot is always taken by the MD5 trailer
        if (len(self) + 2) * SLOT_SIZE > length:
            raise TableCapacityError(
                f"No room in the table for partition '{partition.name}' "
                f"({len(self)} partitions already present)"
            )
        self.append(partition)
        return partition

    def remove(self, name: str) -> Partition:
        partition = self.by_name(name)
        del self[self.index(partition)]
        return partition

    def update(self, name: str, /, **changes) -> Partition:
        partition = self.by_name(name)
        new_type = changes.get("type", partition.type)
        if new_type != partition.type and new_type in SUBTYPES and "subtype" not in changes:
            # switching the type resets the subtype to the first one of the new type
            changes["subtype"] = next(iter(SUBTYPES[new_type]))
        updated = replace(partition, **changes)
        updated.validate()
        if updated.name != name and self.find(updated.name) is not None:
            raise PartitionTableError(f"Partition '{updated.name}' already exists")
        self[self.index(partition)] = updated
        return updated

    def __str__(self) -> str:
        lines = [
            f"  {'Name':16s} {'Type':5s} {'Subtype':9s} "
            f"{'Offset':>10s} {'Size':>10s} {'End':>10s} {'Flags':>5s}"
        ]
        for p in self:
            lines.append(
                f"  {p.name:16s} {p.type:5s} {p.subtype:9s} "
                f"{p.offset:#10x} {p.size:#10x} {p.end:#10x} {p.flags:#5x} "
                f"({_human(p.size)})"
            )
        return "\n".join(lines)
