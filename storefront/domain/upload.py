from typing import Optional

from pydantic import BaseModel


class UploadResult(BaseModel):
    """Outcome of a single media upload or delete"""
    success: bool
    url: Optional[str] = None
    error: Optional[str] = None
    filename: Optional[str] = None
