#  Copyright (c) espparttool contributors 2026-10-18.

from typing import Callable


class FlashInterface:
    warn: Callable = print
    info: Callable = lambda *args: None
    debug: Callable = lambda *args: None

    def flash_read_bytes(self, start: int, length: int) -> bytes:
        raise NotImplementedError()

    def flash_write_bytes(self, start: int, data: bytes) -> None:
        raise NotImplementedError()
