"""
Uniform result returned by every service operation
"""
from typing import Any, Optional

from pydantic import BaseModel, PrivateAttr


class ActionResult(BaseModel):
    """
    {success, message?, error?, data?}

    Services never raise for expected failures; they return a failed result
    and the API layer maps `status_code` onto the HTTP response.
    """

    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    data: Optional[Any] = None

    _status_code: int = PrivateAttr(default=200)

    @property
    def status_code(self) -> int:
        return self._status_code

    @classmethod
    def ok(cls, message: Optional[str] = None, data: Any = None, status_code: int = 200) -> "ActionResult":
        result = cls(success=True, message=message, data=data)
        result._status_code = status_code
        return result

    @classmethod
    def fail(cls, error: str, status_code: int = 400, data: Any = None) -> "ActionResult":
        result = cls(success=False, error=error, data=data)
        result._status_code = status_code
        return result

    @classmethod
    def not_authenticated(cls) -> "ActionResult":
        return cls.fail("Not authenticated", status_code=401)

    @classmethod
    def forbidden(cls, error: str = "Insufficient permissions") -> "ActionResult":
        return cls.fail(error, status_code=403)

    @classmethod
    def not_found(cls, error: str) -> "ActionResult":
        return cls.fail(error, status_code=404)

    @classmethod
    def unexpected(cls, error: Exception, fallback: str) -> "ActionResult":
        """Failure built from an unexpected exception, keeping its message"""
        return cls.fail(str(error) or fallback, status_code=500)
