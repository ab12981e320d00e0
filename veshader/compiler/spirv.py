# veshader/compiler/spirv.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

SPIRV_MAGIC = 0x07230203
_HEADER_WORDS = 5  # magic, version, generator, bound, schema


@dataclass(frozen=True, slots=True)
class SpirvHeader:
    version_major: int
    version_minor: int
    generator: int
    bound: int
    word_count: int


def spirv_words(binary: bytes) -> NDArray[np.uint32]:
    """
    View a SPIR-V module as native-order 32-bit words.

    Raises:
        ValueError: If the blob is not a SPIR-V module.
    """
    if len(binary) % 4 != 0:
        raise ValueError(f"SPIR-V size {len(binary)} is not a multiple of 4")
    if len(binary) < _HEADER_WORDS * 4:
        raise ValueError("SPIR-V module is shorter than its header")

    words = np.frombuffer(binary, dtype="<u4")
    if words[0] == SPIRV_MAGIC:
        return words
    swapped = words.byteswap()
    if swapped[0] == SPIRV_MAGIC:
        return swapped
    raise ValueError(f"Bad SPIR-V magic number 0x{int(words[0]):08x}")


def read_header(binary: bytes) -> SpirvHeader:
    words = spirv_words(binary)
    version = int(words[1])
    return SpirvHeader(
        version_major=(version >> 16) & 0xFF,
        version_minor=(version >> 8) & 0xFF,
        generator=int(words[2]),
        bound=int(words[3]),
        word_count=int(words.size),
    )
