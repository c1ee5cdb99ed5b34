"""
Frontmatter extraction and a tiny YAML subset parser.

Only the two keys needed for sharing decisions are understood:

- ``visibility``: a scalar, an inline ``[a, b]`` list or a block list
- ``visibility_emails``: a mapping of term -> inline/block list or scalar

Notes are hand edited, so nothing here raises on malformed input; a field
that cannot be read is simply left unset.
"""

import re
import uuid
from typing import Dict, List, Optional, Tuple

from .schemas.notes import NoteMetadata, NoteRecord
from .timestamps import now_ms

DELIMITER = "---"

_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n?", re.DOTALL)
_TOP_LEVEL_KEY_RE = re.compile(r"^([A-Za-z0-9_\-]+)\s*:\s*(.*)$")
_TOP_LEVEL_KEY_START_RE = re.compile(r"^[A-Za-z0-9_\-]+\s*:")
_NESTED_KEY_RE = re.compile(r"^\s{2}([^:\r\n]+)\s*:\s*(.*)$")
_LINE_SPLIT_RE = re.compile(r"\r?\n")


def split_frontmatter(document: str) -> Tuple[Optional[str], str]:
    """Split a document into (metadata block, body).

    Returns ``(None, document)`` when the document has no well-formed
    leading ``---`` block. The block is returned untrimmed and the body is
    everything after the closing delimiter.
    """
    if not document.startswith(DELIMITER):
        return None, document

    match = _FRONTMATTER_RE.match(document)
    if not match:
        return None, document

    return match.group(1), document[match.end():]


def parse_inline_array(value: str) -> List[str]:
    """Parse ``[a, b, c]`` into ``["a", "b", "c"]``, dropping empty items."""
    inner = value.strip()
    if inner.startswith("["):
        inner = inner[1:]
    if inner.endswith("]"):
        inner = inner[:-1]
    return [item.strip() for item in inner.split(",") if item.strip()]


def parse_block_array(lines: List[str], start: int, indent: int) -> Tuple[List[str], int]:
    """Collect ``- item`` lines at exactly ``indent`` spaces starting at ``start``.

    Returns the items and the index of the last consumed line
    (``start - 1`` when nothing matched).
    """
    pattern = re.compile("^" + " " * indent + r"-\s*(.*)$")
    items: List[str] = []
    i = start
    while i < len(lines):
        match = pattern.match(lines[i])
        if not match:
            break
        item = match.group(1).strip()
        if item:
            items.append(item)
        i += 1
    return items, i - 1


def _parse_visibility_emails(lines: List[str], start: int) -> Tuple[Dict[str, List[str]], int]:
    """Read the nested term mapping below ``visibility_emails:``.

    Returns the mapping and the index of the last line that belongs to it.
    """
    mapping: Dict[str, List[str]] = {}
    last = start - 1
    j = start
    while j < len(lines):
        sub = lines[j]
        # next top-level key or the closing fence ends the mapping
        if _TOP_LEVEL_KEY_START_RE.match(sub) or sub.startswith(DELIMITER):
            break

        match = _NESTED_KEY_RE.match(sub)
        if match:
            term = match.group(1).strip()
            rest = match.group(2).strip()
            if term:
                if rest.startswith("["):
                    mapping[term] = parse_inline_array(rest)
                elif not rest:
                    mapping[term], j = parse_block_array(lines, j + 1, 4)
                else:
                    mapping[term] = [rest]
        last = j
        j += 1
    return mapping, last


def parse_metadata(block: Optional[str]) -> NoteMetadata:
    """Extract ``visibility`` and ``visibility_emails`` from a metadata block."""
    metadata = NoteMetadata()
    if not block:
        return metadata

    lines = _LINE_SPLIT_RE.split(block)
    i = 0
    while i < len(lines):
        line = lines[i]
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            i += 1
            continue

        top = _TOP_LEVEL_KEY_RE.match(line)
        if not top:
            i += 1
            continue

        key, rest = top.group(1), top.group(2)

        if key == "visibility":
            if not rest:
                items, i = parse_block_array(lines, i + 1, 2)
                if items:
                    metadata.visibility = items
            elif rest.strip().startswith("["):
                metadata.visibility = parse_inline_array(rest)
            elif rest.strip():
                metadata.visibility = rest.strip()

        elif key == "visibility_emails":
            mapping, i = _parse_visibility_emails(lines, i + 1)
            if mapping:
                metadata.visibility_emails = mapping

        i += 1

    return metadata


def parse_document(
    text: str,
    note_id: Optional[str] = None,
    source_name: Optional[str] = None,
) -> NoteRecord:
    """Build a fresh NoteRecord from raw document text.

    ``last_modified`` is stamped with the current time; callers loading rows
    from storage overwrite it with the stored value.
    """
    block, body = split_frontmatter(text)
    return NoteRecord(
        id=note_id if note_id is not None else str(uuid.uuid4()),
        body=body.lstrip(),
        metadata=parse_metadata(block),
        frontmatter=block if block is not None and block.strip() else None,
        source_name=source_name,
        last_modified=now_ms(),
        auto_update_timestamp=False,
    )
