"""Note repository for database operations."""

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import delete, desc, insert as sa_insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import utcnow
from ..models.note import Note
from ..models.visibility_term import VisibilityTerm
from ..schemas.notes import NoteInput
from ..timestamps import now_ms, resolve_last_modified
from .base import INoteStore

logger = logging.getLogger(__name__)


class NoteRepository(INoteStore):
    """Repository for note and visibility term rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _insert(self):
        """Dialect specific INSERT supporting ON CONFLICT."""
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
        else:
            raise NotImplementedError(f"Conditional upsert is not supported on {dialect}")
        return insert

    async def list_by_owner(self, owner: str) -> List[Note]:
        """List owner's notes, newest first."""
        stmt = (
            select(Note)
            .where(Note.user_id == owner)
            .order_by(desc(Note.last_modified), desc(Note.updated_at))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_note(self, owner: str, note_id: str) -> Optional[Note]:
        """Get a single note by (owner, id)."""
        stmt = (
            select(Note)
            .where(Note.user_id == owner, Note.id == note_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_visibility_terms(self, owner: str) -> List[VisibilityTerm]:
        """List owner's visibility terms ordered by term."""
        stmt = (
            select(VisibilityTerm)
            .where(VisibilityTerm.user_id == owner)
            .order_by(VisibilityTerm.term)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def _execute_conditional_upsert(
        self,
        owner: str,
        note_id: str,
        markdown: str,
        source_name: Optional[str],
        last_modified: int,
    ) -> None:
        insert = self._insert()
        now = utcnow()
        stmt = insert(Note).values(
            user_id=owner,
            id=note_id,
            markdown=markdown,
            source_name=source_name,
            last_modified=last_modified,
            created_at=now,
            updated_at=now,
        )
        # the WHERE makes the timestamp check atomic for the row
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "id"],
            set_={
                "markdown": stmt.excluded.markdown,
                "source_name": stmt.excluded.source_name,
                "last_modified": stmt.excluded.last_modified,
                "updated_at": stmt.excluded.updated_at,
            },
            where=stmt.excluded.last_modified >= Note.last_modified,
        )
        await self.session.execute(stmt)

    async def conditional_upsert(
        self,
        owner: str,
        note_id: str,
        markdown: str,
        source_name: Optional[str],
        last_modified: int,
    ) -> None:
        """Write a note unless the stored copy has a newer last_modified."""
        await self._execute_conditional_upsert(owner, note_id, markdown, source_name, last_modified)
        await self.session.commit()

    async def upsert_notes(self, owner: str, notes: Iterable[NoteInput]) -> None:
        """Apply a batch of notes with last-writer-wins per (owner, id).

        Notes without a usable timestamp are stamped with the current time.
        Writes run in input order; superseded writes are dropped silently.
        """
        notes = list(notes)
        if not notes:
            return

        now = now_ms()
        for note in notes:
            await self._execute_conditional_upsert(
                owner,
                note.id,
                note.markdown,
                note.source_name,
                resolve_last_modified(note.last_modified, now),
            )
        await self.session.commit()
        logger.debug(f"Upserted {len(notes)} notes for user {owner}")

    async def delete_note(self, owner: str, note_id: str) -> bool:
        """Delete one note. Returns False when nothing matched."""
        stmt = delete(Note).where(Note.user_id == owner, Note.id == note_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return bool(result.rowcount)

    async def delete_all_for_owner(self, owner: str) -> None:
        """Delete every note and visibility term of the owner."""
        await self.session.execute(delete(Note).where(Note.user_id == owner))
        await self.session.execute(delete(VisibilityTerm).where(VisibilityTerm.user_id == owner))
        await self.session.commit()
        logger.info(f"Deleted all notes and visibility terms for user {owner}")

    async def replace_visibility_terms(self, owner: str, terms: Dict[str, List[str]]) -> None:
        """Replace the owner's whole term set; an empty mapping clears it."""
        await self.session.execute(delete(VisibilityTerm).where(VisibilityTerm.user_id == owner))

        rows = []
        for term, emails in terms.items():
            normalized = (str(email or "").strip().lower() for email in (emails or []))
            # dict keeps first-seen order while dropping duplicates
            unique = list(dict.fromkeys(email for email in normalized if email))
            rows.append({"user_id": owner, "term": term, "emails": unique, "updated_at": utcnow()})

        if rows:
            await self.session.execute(sa_insert(VisibilityTerm), rows)

        await self.session.commit()

    async def scan_candidates(self, needle: str) -> List[Note]:
        """Notes of any owner whose raw markdown mentions ``needle``.

        This is a cheap pre-filter, callers must still check access.
        """
        stmt = (
            select(Note)
            .where(Note.markdown.ilike(f"%{needle}%"))
            .order_by(desc(Note.updated_at))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
