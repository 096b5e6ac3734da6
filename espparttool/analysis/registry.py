#  Copyright (c) espparttool contributors 2026-10-18.

from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Mapping, Type

from .errors import UnknownSubtypeError, UnknownTypeError


class PartitionType(IntEnum):
    APP = 0x00
    DATA = 0x01


class AppSubtype(IntEnum):
    FACTORY = 0x00
    OTA_0 = 0x10
    OTA_1 = 0x11
    OTA_2 = 0x12
    OTA_3 = 0x13
    OTA_4 = 0x14
    OTA_5 = 0x15
    OTA_6 = 0x16
    OTA_7 = 0x17
    OTA_8 = 0x18
    OTA_9 = 0x19
    OTA_10 = 0x1A
    OTA_11 = 0x1B
    OTA_12 = 0x1C
    OTA_13 = 0x1D
    OTA_14 = 0x1E
    OTA_15 = 0x1F
    TEST = 0x20


class DataSubtype(IntEnum):
    OTA = 0x00
    PHY = 0x01
    NVS = 0x02
    COREDUMP = 0x03
    NVS_KEYS = 0x04
    EFUSE = 0x05
    ESPHTTPD = 0x80
    FAT = 0x81
    SPIFFS = 0x82


SUBTYPE_ENUMS: Mapping[PartitionType, Type[IntEnum]] = MappingProxyType(
    {
        PartitionType.APP: AppSubtype,
        PartitionType.DATA: DataSubtype,
    }
)


def __names(enum: Type[IntEnum]) -> Dict[str, int]:
    return {item.name.lower(): item.value for item in enum}


def __reverse(names: Mapping[str, int]) -> Dict[int, str]:
    return {value: name for name, value in names.items()}


# name -> byte
TYPES: Mapping[str, int] = MappingProxyType(__names(PartitionType))
SUBTYPES: Mapping[str, Mapping[str, int]] = MappingProxyType(
    {
        ptype.name.lower(): MappingProxyType(__names(enum))
        for ptype, enum in SUBTYPE_ENUMS.items()
    }
)

# byte -> name
TYPE_NAMES: Mapping[int, str] = MappingProxyType(__reverse(TYPES))
SUBTYPE_NAMES: Mapping[str, Mapping[int, str]] = MappingProxyType(
    {
        type_name: MappingProxyType(__reverse(subtypes))
        for type_name, subtypes in SUBTYPES.items()
    }
)


def type_code(type_name: str) -> int:
    try:
        return TYPES[type_name]
    except KeyError:
        raise UnknownTypeError(
            f"Unknown partition type '{type_name}' "
            f"(expected one of: {', '.join(TYPES)})"
        ) from None


def subtype_code(type_name: str, subtype_name: str) -> int:
    type_code(type_name)
    subtypes = SUBTYPES[type_name]
    try:
        return subtypes[subtype_name]
    except KeyError:
        raise UnknownSubtypeError(
            f"Unknown subtype '{subtype_name}' for partition type '{type_name}' "
            f"(expected one of: {', '.join(subtypes)})"
        ) from None


def type_name(code: int) -> str:
    try:
        return TYPE_NAMES[code]
    except KeyError:
        raise UnknownTypeError(f"Unknown partition type 0x{code:02X}") from None


def subtype_name(type_name: str, code: int) -> str:
    type_code(type_name)
    names = SUBTYPE_NAMES[type_name]
    try:
        return names[code]
    except KeyError:
        raise UnknownSubtypeError(
            f"Unknown subtype 0x{code:02X} for partition type '{type_name}'"
        ) from None
