"""
Header/payload framing on top of a single bit channel pass

Layout, every field stored one bit per color byte:

    filename_length   16 bits, little-endian (bit 0 first)
    filename_bytes    filename_length * 8 bits, each byte MSB first
    payload_length    64 bits, little-endian (bit 0 first)
    payload           payload_length * 8 bits, each byte MSB first
"""

from typing import NamedTuple, Union

from .bit_channel import BitChannel
from .carrier import Carrier
from .errors import CapacityExceeded, FilenameTooLong, TruncatedCarrier


FILENAME_LENGTH_BITS = 16
PAYLOAD_LENGTH_BITS = 64
MAX_FILENAME_BYTES = (1 << FILENAME_LENGTH_BITS) - 1
HEADER_FIXED_BITS = FILENAME_LENGTH_BITS + PAYLOAD_LENGTH_BITS


class DecodedFrame(NamedTuple):
    filename: str
    payload: bytes


def lossy_utf8(filename: Union[str, bytes]) -> bytes:
    """
    Encode a filename as UTF-8, replacing anything that is not valid text

    Args:
        filename: Text, or raw bytes from an untrusted source (e.g. an OS path)

    Returns:
        Valid UTF-8 bytes; invalid sequences and lone surrogates become U+FFFD
    """
    if isinstance(filename, str):
        filename = filename.encode("utf-8", errors="surrogatepass")
    return bytes(filename).decode("utf-8", errors="replace").encode("utf-8")


def required_bits(filename_length: int, payload_length: int) -> int:
    """Number of color bytes a frame with the given field sizes occupies."""
    return HEADER_FIXED_BITS + filename_length * 8 + payload_length * 8


def _write_uint_le(channel: BitChannel, value: int, width: int) -> None:
    for i in range(width):
        channel.write_bit((value >> i) & 1)


def _write_bytes(channel: BitChannel, data: bytes) -> None:
    for byte in data:
        for i in range(7, -1, -1):
            channel.write_bit((byte >> i) & 1)


def _read_uint_le(channel: BitChannel, width: int, field: str) -> int:
    _ensure_readable(channel, width, field)
    value = 0
    for i in range(width):
        value |= channel.read_bit() << i
    return value


def _read_bytes(channel: BitChannel, length: int, field: str) -> bytes:
    _ensure_readable(channel, length * 8, field)
    out = bytearray(length)
    for index in range(length):
        acc = 0
        for _ in range(8):
            acc = (acc << 1) | channel.read_bit()
        out[index] = acc
    return bytes(out)


def _ensure_readable(channel: BitChannel, bits: int, field: str) -> None:
    # a declared length larger than the carrier can never be satisfied
    if bits > channel.remaining_bits():
        raise TruncatedCarrier(field, bits, channel.remaining_bits())


def encode(carrier: Carrier, filename: Union[str, bytes], payload: bytes) -> Carrier:
    """
    Hide a filename and payload in the carrier's color bytes

    Capacity is validated before the first write, so a failed call leaves
    the carrier exactly as it was.

    Args:
        carrier: Carrier whose color bytes are mutated in place
        filename: Name stored alongside the payload
        payload: Raw bytes to hide

    Returns:
        The same carrier, with only least significant bits altered

    Raises:
        FilenameTooLong: If the UTF-8 filename exceeds 65535 bytes
        CapacityExceeded: If the frame does not fit in the carrier
    """
    filename_bytes = lossy_utf8(filename)
    if len(filename_bytes) > MAX_FILENAME_BYTES:
        raise FilenameTooLong(len(filename_bytes), MAX_FILENAME_BYTES)

    payload = bytes(payload)
    needed = required_bits(len(filename_bytes), len(payload))

    channel = BitChannel(carrier.color_bytes())
    if needed > channel.remaining_bits():
        raise CapacityExceeded(needed, channel.remaining_bits())

    _write_uint_le(channel, len(filename_bytes), FILENAME_LENGTH_BITS)
    _write_bytes(channel, filename_bytes)
    _write_uint_le(channel, len(payload), PAYLOAD_LENGTH_BITS)
    _write_bytes(channel, payload)
    return carrier


def decode(carrier: Carrier) -> DecodedFrame:
    """
    Recover the filename and payload hidden by :func:`encode`

    Args:
        carrier: Carrier holding an encoded frame

    Returns:
        DecodedFrame of (filename, payload); the filename is decoded lossily

    Raises:
        TruncatedCarrier: If the carrier ends before a declared field does
    """
    channel = BitChannel(carrier.color_bytes())

    filename_length = _read_uint_le(channel, FILENAME_LENGTH_BITS, "filename_length")
    filename_bytes = _read_bytes(channel, filename_length, "filename")
    payload_length = _read_uint_le(channel, PAYLOAD_LENGTH_BITS, "payload_length")
    payload = _read_bytes(channel, payload_length, "payload")

    return DecodedFrame(filename_bytes.decode("utf-8", errors="replace"), payload)
