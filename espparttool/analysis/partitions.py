import struct
from dataclasses import dataclass
from logging import debug, warning
from typing import ClassVar, Iterable, List

from Crypto.Hash import MD5

from .errors import ChecksumMismatchError, MagicMismatchError, TableCapacityError
from .flash import TABLE_LENGTH
from .registry import subtype_code, subtype_name, type_code, type_name

SLOT_SIZE = 32
NAME_LENGTH = 16
PARTITION_MAGIC = b"\xAA\x50"
CHECKSUM_MARKER = b"\xEB\xEB" + b"\xFF" * 14
ERASED_SLOT = b"\xFF" * SLOT_SIZE

UINT32_MAX = 0xFFFFFFFF


@dataclass
class Partition:
    type: str
    subtype: str
    offset: int
    size: int
    name: str
    flags: int = 0

    # magic, type, subtype, offset, size, name, flags
    FORMAT: ClassVar[struct.Struct] = struct.Struct("<2sBBII16sI")

    @classmethod
    def from_bytes(cls, data: bytes, strict: bool = False) -> "Partition":
        magic, ptype, psubtype, offset, size, name, flags = cls.FORMAT.unpack(data)
        if magic != PARTITION_MAGIC:
            message = (
                f"Partition entry magic {magic.hex()}[hex] does not match "
                f"expected {PARTITION_MAGIC.hex()}[hex]"
            )
            if strict:
                raise MagicMismatchError(message)
            warning(message)
        ptype_name = type_name(ptype)
        return cls(
            type=ptype_name,
            subtype=subtype_name(ptype_name, psubtype),
            offset=offset,
            size=size,
            name=name.rstrip(b"\x00").decode("utf-8", errors="replace"),
            flags=flags,
        )

    def to_bytes(self) -> bytes:
        self.validate()
        return self.FORMAT.pack(
            PARTITION_MAGIC,
            type_code(self.type),
            subtype_code(self.type, self.subtype),
            self.offset,
            self.size,
            self.name_bytes,
            self.flags,
        )

    @property
    def name_bytes(self) -> bytes:
        # longer names are truncated, never rejected
        return self.name.encode("utf-8")[:NAME_LENGTH].ljust(NAME_LENGTH, b"\x00")

    @property
    def end(self) -> int:
        return self.offset + self.size

    def validate(self) -> None:
        subtype_code(self.type, self.subtype)
        for field in ("offset", "size", "flags"):
            value = getattr(self, field)
            if not isinstance(value, int) or not 0 <= value <= UINT32_MAX:
                raise ValueError(
                    f"Partition '{self.name}' {field} {value!r} "
                    f"is not an unsigned 32-bit integer"
                )
        if not isinstance(self.name, str):
            raise ValueError(f"Partition name {self.name!r} is not a string")

    def __repr__(self) -> str:
        return (
            f"Partition(type={self.type}, subtype={self.subtype}, "
            f"offset=0x{self.offset:X}, size=0x{self.size:X}, "
            f"name={self.name!r}, flags=0x{self.flags:X})"
        )


def decode(data: bytes, strict: bool = False) -> List[Partition]:
    """Decode a partition table region into a list of partitions.

    Decoding stops at the first erased (all 0xFF) slot, at the MD5 trailer
    slot, or when no full slot is left in ``data``. The trailer digest is
    verified against all record slots preceding it.

    :param data: raw table region, read from the table offset
    :param strict: raise MagicMismatchError on entries with invalid magic
    :raises ChecksumMismatchError: the stored MD5 does not match
    :raises UnknownTypeError: an entry uses an unregistered type or subtype
    """
    slots = []
    md5 = MD5.new()

    for start in range(0, len(data) - SLOT_SIZE + 1, SLOT_SIZE):
        slot = bytes(data[start : start + SLOT_SIZE])

        if slot == ERASED_SLOT:
            debug(f"Erased slot at 0x{start:X}, table ends")
            break

        if slot.startswith(CHECKSUM_MARKER):
            stored = slot[len(CHECKSUM_MARKER) :]
            calculated = md5.digest()
            if stored != calculated:
                raise ChecksumMismatchError(
                    f"Partition table is corrupted: stored MD5 {stored.hex()} "
                    f"does not match calculated MD5 {calculated.hex()}"
                )
            debug(f"MD5 trailer at 0x{start:X} is valid, table ends")
            break

        md5.update(slot)
        slots.append(slot)

    # entries are parsed only once the checksum (if any) is verified
    partitions = []
    for i, slot in enumerate(slots):
        partition = Partition.from_bytes(slot, strict=strict)
        debug(f"Slot at 0x{i * SLOT_SIZE:X}: {partition}")
        partitions.append(partition)
    return partitions


def encode(partitions: Iterable[Partition], length: int = TABLE_LENGTH) -> bytes:
    """Encode partitions into a table region of exactly ``length`` bytes.

    The entries are followed by an MD5 trailer slot; the rest of the region
    is filled with 0xFF.

    :raises TableCapacityError: the entries and the trailer don't fit
    :raises UnknownTypeError: an entry uses an unregistered type or subtype
    """
    partitions = list(partitions)
    required = (len(partitions) + 1) * SLOT_SIZE
    if required > length:
        raise TableCapacityError(
            f"{len(partitions)} partitions need 0x{required:X} bytes "
            f"with the MD5 trailer, but the table is only 0x{length:X} bytes long"
        )

    # serialize everything first, so that nothing is written on error
    slots = [partition.to_bytes() for partition in partitions]

    data = bytearray(b"\xFF" * length)
    md5 = MD5.new()
    pos = 0
    for slot in slots:
        md5.update(slot)
        data[pos : pos + SLOT_SIZE] = slot
        pos += SLOT_SIZE
    data[pos : pos + SLOT_SIZE] = CHECKSUM_MARKER + md5.digest()
    return bytes(data)
