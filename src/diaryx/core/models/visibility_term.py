# Named sharing group -> email list, per owner
from typing import List

from sqlalchemy import JSON, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel

# TEXT[] on PostgreSQL, JSON text elsewhere (SQLite in tests)
EmailList = JSON().with_variant(ARRAY(Text()), "postgresql")


class VisibilityTerm(BaseModel):
    """Sharing group declared by an owner.

    Rows are never patched: a sync replaces the owner's whole set.
    """

    __tablename__ = "diaryx_visibility_term"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    term: Mapped[str] = mapped_column(Text, primary_key=True)
    emails: Mapped[List[str]] = mapped_column(EmailList, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<VisibilityTerm(user_id={self.user_id!r}, term={self.term!r}, emails={len(self.emails or [])})>"
