"""
API response models for the LSB codec service
"""

from pydantic import BaseModel
from typing import Any, Dict, Optional


class StegoAPIResult(BaseModel):
    """
    Standard API response model for all LSB codec endpoints
    """
    success: bool
    message: str
    path: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
