"""Access decisions for notes shared through visibility terms."""

import logging
from typing import Any, Dict, Iterable, List

from .frontmatter import parse_document
from .schemas.notes import NoteRecord
from .timestamps import resolve_last_modified

logger = logging.getLogger(__name__)


def to_visibility_list(value: Any) -> List[str]:
    """Normalize a visibility value into a list of non-empty trimmed terms."""
    if isinstance(value, (list, tuple)):
        items = ("" if item is None else str(item).strip() for item in value)
        return [item for item in items if item]
    if isinstance(value, str):
        value = value.strip()
        return [value] if value else []
    return []


def _contains_email(entries: Any, email: str) -> bool:
    if not isinstance(entries, list):
        return False
    return any(isinstance(entry, str) and entry.strip().lower() == email for entry in entries)


def can_view(note: NoteRecord, viewer_email: str) -> bool:
    """Check whether ``viewer_email`` is listed under any of the note's terms.

    A note without visibility terms is private. Term keys and emails are
    matched case-insensitively.
    """
    terms = to_visibility_list(note.metadata.visibility)
    if not terms:
        return False

    mapping = note.metadata.visibility_emails or {}
    email = viewer_email.strip().lower()

    normalized: Dict[str, Any] = {}
    for key, entries in mapping.items():
        normalized[key.strip().lower()] = entries if isinstance(entries, list) else []

    for term in terms:
        if _contains_email(mapping.get(term), email):
            return True
        if _contains_email(normalized.get(term.lower()), email):
            return True
    return False


def find_shared_with(viewer_email: str, candidate_rows: Iterable[Any]) -> List[NoteRecord]:
    """Filter candidate rows down to the notes ``viewer_email`` may read.

    ``candidate_rows`` come from a coarse substring scan and carry ``id``,
    ``markdown``, ``source_name`` and ``last_modified``. Rows that fail to
    parse are logged and skipped. Results are unique by note id (first row
    wins) and sorted newest first, then by id.
    """
    notes: List[NoteRecord] = []
    seen = set()

    for row in candidate_rows:
        try:
            note = parse_document(row.markdown, note_id=row.id, source_name=row.source_name)
            note.last_modified = resolve_last_modified(row.last_modified)
            note.source_name = row.source_name
        except Exception:
            logger.warning("Failed to parse shared note %s", getattr(row, "id", None), exc_info=True)
            continue

        if not can_view(note, viewer_email):
            continue
        if note.id in seen:
            continue

        seen.add(note.id)
        notes.append(note)

    notes.sort(key=lambda n: (-n.last_modified, n.id))
    return notes
