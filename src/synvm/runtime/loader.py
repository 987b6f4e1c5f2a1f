import struct
import logging as lg
from pathlib import Path

from synvm.common.hwconf import MEMORY_SIZE, WORD_SIZE


class LoadError(Exception):
    pass


def words_from_bytes(data: bytes) -> list[int]:
    if len(data) % WORD_SIZE != 0:
        raise LoadError(f'Image size {len(data)} is not a whole number of words')

    count = len(data) // WORD_SIZE

    if count > MEMORY_SIZE:
        raise LoadError(f'Image of {count} words does not fit into {MEMORY_SIZE} words of memory')

    return list(struct.unpack(f'<{count}H', data))


def words_to_bytes(words: list[int]) -> bytes:
    return struct.pack(f'<{len(words)}H', *words)


def load_image(path: str | Path) -> list[int]:
    if isinstance(path, str):
        path = Path(path)

    lg.debug(f'Loading image {path}')
    words = words_from_bytes(path.read_bytes())
    lg.info(f'Loaded {len(words)} words from {path.name}')
    return words
