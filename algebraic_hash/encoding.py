"""Byte strings to field elements.

Bytes are cut into chunks of field.bytes_per_element bytes (7 for the 63/64-bit
fields, 31 for the 252-bit field) so every chunk, read little-endian, is below
the modulus. Full chunks map to one element each; the leftover tail
(possibly empty) gets a 0x01 marker byte appended, so the position of the
marker fixes where the input ended and the map is injective across lengths.
Empty input encodes to the single element 1.
"""

from typing import List

from .field import PrimeField

MARKER_BYTE = 0x01


def bytes_to_elements(field: PrimeField, data: bytes) -> List[int]:
    """Encode arbitrary bytes as a list of field elements.

    Args:
        field: Target field
        data: Input bytes (may be empty)

    Returns:
        len(data) // chunk + 1 element values
    """
    chunk = field.bytes_per_element
    data = bytes(data)
    elements = []
    offset = 0
    while len(data) - offset >= chunk:
        elements.append(int.from_bytes(data[offset:offset + chunk], "little"))
        offset += chunk
    # Tail is shorter than a chunk, so the marker always fits.
    tail = data[offset:] + bytes([MARKER_BYTE])
    elements.append(int.from_bytes(tail, "little"))
    return elements
