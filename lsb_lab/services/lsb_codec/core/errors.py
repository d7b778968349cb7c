"""
Error types raised by the LSB codec
"""

from typing import Any, Dict, Optional


class CodecError(ValueError):
    """Base class for all codec failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class CapacityExceeded(CodecError):
    """The carrier does not hold enough color bytes for the requested bits."""

    def __init__(self, required_bits: int, available_bits: int):
        super().__init__(
            f"Not enough capacity in carrier: {required_bits} bits required, {available_bits} available",
            {"required_bits": required_bits, "available_bits": available_bits},
        )
        self.required_bits = required_bits
        self.available_bits = available_bits


class FilenameTooLong(CodecError):
    """The UTF-8 encoded filename does not fit the 16-bit length field."""

    def __init__(self, length: int, limit: int):
        super().__init__(
            f"Filename is {length} bytes long, maximum is {limit}",
            {"length": length, "limit": limit},
        )
        self.length = length
        self.limit = limit


class TruncatedCarrier(CodecError):
    """The carrier ran out of color bytes before a declared field was read."""

    def __init__(self, field: str, required_bits: int, available_bits: int):
        super().__init__(
            f"Carrier truncated while reading {field}: {required_bits} bits declared, {available_bits} available",
            {"field": field, "required_bits": required_bits, "available_bits": available_bits},
        )
        self.field = field
        self.required_bits = required_bits
        self.available_bits = available_bits
