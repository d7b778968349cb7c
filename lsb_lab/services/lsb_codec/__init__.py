"""
LSB Codec Service - Lossless payload hiding in image color bytes

Hides a filename and an arbitrary byte payload in the least significant
bit of every red, green and blue byte of a carrier image:
- Bit channel over the carrier's color bytes (alpha never touched)
- Fixed frame layout: u16 filename length, filename, u64 payload length, payload
- Capacity checked before any write
- Always saved as PNG so the hidden bits survive

Nothing is encrypted or compressed.
"""

__version__ = "1.0.0"
__author__ = "Image Lab Team"
