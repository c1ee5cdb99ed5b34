"""Document store contract consumed by the note services."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional


class INoteStore(ABC):
    """Per-owner note and visibility term storage.

    ``conditional_upsert`` must check ``last_modified >= stored`` atomically
    for the row it writes.
    """

    @abstractmethod
    async def list_by_owner(self, owner: str) -> List[Any]:
        """Owner's notes ordered by last_modified desc, then update time desc."""
        pass

    @abstractmethod
    async def get_note(self, owner: str, note_id: str) -> Optional[Any]:
        """A single note by (owner, id), None when missing."""
        pass

    @abstractmethod
    async def list_visibility_terms(self, owner: str) -> List[Any]:
        """Owner's visibility terms ordered by term."""
        pass

    @abstractmethod
    async def conditional_upsert(
        self,
        owner: str,
        note_id: str,
        markdown: str,
        source_name: Optional[str],
        last_modified: int,
    ) -> None:
        """Insert, or update when ``last_modified`` is not older than the stored row."""
        pass

    @abstractmethod
    async def upsert_notes(self, owner: str, notes: Iterable[Any]) -> None:
        """Conditional upsert for a batch of notes."""
        pass

    @abstractmethod
    async def delete_note(self, owner: str, note_id: str) -> bool:
        """Delete one note."""
        pass

    @abstractmethod
    async def delete_all_for_owner(self, owner: str) -> None:
        """Delete every note and term of the owner."""
        pass

    @abstractmethod
    async def replace_visibility_terms(self, owner: str, terms: Dict[str, List[str]]) -> None:
        """Delete all terms of the owner, then insert ``terms``."""
        pass

    @abstractmethod
    async def scan_candidates(self, needle: str) -> List[Any]:
        """Rows of any owner whose markdown contains ``needle``."""
        pass
