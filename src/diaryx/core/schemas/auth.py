"""
Identity resolved from a bearer token.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CurrentUser(BaseModel):
    """Authenticated caller."""

    id: str = Field(description="Owner id (token subject)")
    email: Optional[str] = Field(default=None, description="Email claim, used for shared notes")
