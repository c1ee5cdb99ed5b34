# Note row as persisted per owner
from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, utcnow


class Note(BaseModel):
    """Raw markdown document owned by a user.

    Ids come from the client and are only unique per owner, hence the
    composite primary key.
    """

    __tablename__ = "diaryx_note"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    id: Mapped[str] = mapped_column(String(255), primary_key=True)

    markdown: Mapped[str] = mapped_column(Text, nullable=False)
    source_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # client supplied, milliseconds since epoch; drives conflict resolution
    last_modified: Mapped[int] = mapped_column(BigInteger, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Note(user_id={self.user_id!r}, id={self.id!r}, last_modified={self.last_modified})>"


# newest-first scans per owner
Index("diaryx_note_user_updated_idx", Note.user_id, Note.updated_at.desc())
