from dataclasses import dataclass

TABLE_OFFSET = 0x8000
TABLE_LENGTH = 0xC00


@dataclass(frozen=True)
class TableLayout:
    name: str
    offset: int
    length: int


TABLE_LAYOUTS = {
    # partition table inside a full flash image (or on the device itself)
    "flash": TableLayout(name="flash", offset=TABLE_OFFSET, length=TABLE_LENGTH),
    # bare partition table binary, as produced by gen_esp32part.py
    "bin": TableLayout(name="bin", offset=0x0, length=TABLE_LENGTH),
}

DEFAULT_LAYOUT = TABLE_LAYOUTS["flash"]
