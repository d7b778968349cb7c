from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_TEXT_FILENAME = "output.txt"
DEFAULT_RECOVERED_FILENAME = "recovered.bin"


class StegoPayloadKind(str, Enum):
    text = "text"
    file = "file"


class StegoLimits(BaseModel):
    max_cover_pixels: Optional[int] = Field(default=None, description="Max total pixels allowed for cover image")
    max_payload_bytes: Optional[int] = Field(default=None, description="Absolute max bytes of hidden payload")


class StegoPayload(BaseModel):
    kind: StegoPayloadKind
    filename: str
    data: bytes


class CapacityResult(BaseModel):
    width: int
    height: int
    capacity_bits: int
    header_bits: int
    max_payload_bytes: int


class HideResult(BaseModel):
    filename: str
    payload_size_bytes: int
    used_capacity_bits: int
    capacity_bits: int
    header_bits: int


class RevealResult(BaseModel):
    filename: str
    payload: bytes
    size_bytes: int
    output_path: Optional[Path] = None

    def as_text(self) -> Optional[str]:
        try:
            return self.payload.decode("utf-8")
        except UnicodeDecodeError:
            return None
