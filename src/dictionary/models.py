"""Data models for dictionary lookups."""

from typing import Optional
from pydantic import BaseModel


class DictionaryResult(BaseModel):
    """Outcome of a single word lookup.

    Either `exists` is meaningful, or `error` is set and the lookup failed.
    """
    word: str
    exists: bool = False
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None
