#  Copyright (c) espparttool contributors 2026-10-18.

import os
from pathlib import Path
from typing import Union

from .interface import FlashInterface


class DumpFileFlash(FlashInterface):
    """Flash memory backed by a dump file on disk.

    Offsets are relative to the beginning of the file, so a full flash dump
    maps 1:1 to the chip's address space. Space that has to be created when
    writing past the end of the file is filled with 0xFF, like erased flash.
    """

    def __init__(
        self,
        path: Union[str, Path],
        create: bool = False,
        **kwargs,
    ) -> None:
        self.path = Path(path)
        if not self.path.exists():
            if not create:
                raise FileNotFoundError(f"Flash dump file '{self.path}' doesn't exist")
            self.path.touch()
        if kwargs.get("debug", False):
            self.info = print
            self.debug = print

    @property
    def size(self) -> int:
        return os.stat(self.path).st_size

    def flash_read_bytes(self, start: int, length: int) -> bytes:
        if start < 0 or length < 0:
            raise ValueError(f"Invalid read range: start=0x{start:X}, length=0x{length:X}")
        self.debug(f"Reading 0x{length:X} bytes from 0x{start:X} of {self.path}")
        with open(self.path, "rb") as fs:
            fs.seek(start, os.SEEK_SET)
            data = fs.read(length)
        if len(data) < length:
            self.warn(
                f"Read only 0x{len(data):X} of 0x{length:X} bytes at 0x{start:X} - "
                f"{self.path} is 0x{self.size:X} bytes long"
            )
        return data

    def flash_write_bytes(self, start: int, data: bytes) -> None:
        if start < 0:
            raise ValueError(f"Invalid write address 0x{start:X}")
        size = self.size
        self.debug(f"Writing 0x{len(data):X} bytes to 0x{start:X} of {self.path}")
        with open(self.path, "r+b") as fs:
            if start > size:
                fs.seek(size, os.SEEK_SET)
                fs.write(b"\xFF" * (start - size))
            fs.seek(start, os.SEEK_SET)
            fs.write(data)
