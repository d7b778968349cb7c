"""
Sequential single-bit access over a carrier's color bytes
"""

from typing import MutableSequence

from .errors import CapacityExceeded


class BitChannel:
    """
    Linear cursor over color bytes, one hidden bit per byte.

    Bytes are consumed in the order they appear in the buffer, which for an
    image carrier is pixel-major, channel-minor (R0, G0, B0, R1, ...).
    Only the least significant bit of a byte is ever touched.

    Example:
        >>> buf = bytearray([10, 11, 12])
        >>> channel = BitChannel(buf)
        >>> channel.write_bit(1)
        >>> buf[0]
        11
    """

    def __init__(self, color_bytes: MutableSequence[int]):
        self._buffer = color_bytes
        self._total = len(color_bytes)
        self._cursor = 0

    @property
    def position(self) -> int:
        return self._cursor

    @property
    def total_bits(self) -> int:
        return self._total

    def remaining_bits(self) -> int:
        """Number of color bytes not yet consumed."""
        return self._total - self._cursor

    def write_bit(self, bit: int) -> None:
        """
        Store a bit in the LSB of the next color byte

        Args:
            bit: 0 or 1 (any truthy value is stored as 1)

        Raises:
            CapacityExceeded: If every color byte has been consumed
        """
        if self._cursor >= self._total:
            raise CapacityExceeded(self._cursor + 1, self._total)
        index = self._cursor
        self._buffer[index] = (int(self._buffer[index]) & 0xFE) | (1 if bit else 0)
        self._cursor += 1

    def read_bit(self) -> int:
        """
        Read the LSB of the next color byte

        Returns:
            The stored bit (0 or 1)

        Raises:
            CapacityExceeded: If every color byte has been consumed
        """
        if self._cursor >= self._total:
            raise CapacityExceeded(self._cursor + 1, self._total)
        bit = int(self._buffer[self._cursor]) & 0x01
        self._cursor += 1
        return bit
