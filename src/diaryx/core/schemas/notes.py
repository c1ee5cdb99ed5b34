"""
Note sync schemas.

These schemas define the in-memory note record produced by the metadata
parser and the API contracts for syncing notes and visibility terms.
Field names are snake_case in Python and camelCase on the wire.
"""

import math
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NoteMetadata(BaseModel):
    """Metadata fields the parser understands.

    Unknown keys are tolerated so records built elsewhere round-trip.
    """

    visibility: Optional[Union[str, List[str]]] = Field(
        default=None, description="Sharing term or ordered list of terms"
    )
    visibility_emails: Optional[Dict[str, List[str]]] = Field(
        default=None, description="Term -> emails allowed to view"
    )

    model_config = ConfigDict(extra="allow")


class NoteRecord(BaseModel):
    """Canonical in-memory note."""

    id: str = Field(description="Note identifier, unique per owner")
    body: str = Field(description="Text after the metadata block, left-trimmed")
    metadata: NoteMetadata = Field(default_factory=NoteMetadata)
    frontmatter: Optional[str] = Field(default=None, description="Raw metadata block")
    source_name: Optional[str] = Field(default=None, alias="sourceName")
    last_modified: int = Field(alias="lastModified", description="Milliseconds since epoch")
    auto_update_timestamp: bool = Field(default=False, alias="autoUpdateTimestamp")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "n1",
                "body": "Hello",
                "metadata": {
                    "visibility": ["friends"],
                    "visibility_emails": {"friends": ["alice@example.com"]},
                },
                "frontmatter": "visibility: [friends]",
                "sourceName": "hello.md",
                "lastModified": 1726000000000,
                "autoUpdateTimestamp": False,
            }
        },
    )


class NoteInput(BaseModel):
    """A single note in a sync request.

    ``id`` and ``markdown`` must be real strings; anything else makes the
    item invalid and the caller drops it.
    """

    id: str
    markdown: str
    source_name: Optional[str] = Field(default=None, alias="sourceName")
    last_modified: Optional[float] = Field(default=None, alias="lastModified")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", "markdown", mode="before")
    @classmethod
    def require_str(cls, v):
        if not isinstance(v, str):
            raise ValueError("must be a string")
        return v

    @field_validator("source_name", mode="before")
    @classmethod
    def coerce_source_name(cls, v):
        return v if isinstance(v, str) else None

    @field_validator("last_modified", mode="before")
    @classmethod
    def coerce_last_modified(cls, v):
        """Keep numeric-looking values, turn the rest into None (stamped later)."""
        if v is None or isinstance(v, bool):
            return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        return value if math.isfinite(value) else None


class VisibilityTermInput(BaseModel):
    """Visibility term as submitted by a client."""

    term: str
    emails: List[str] = Field(default_factory=list)

    @field_validator("term", mode="before")
    @classmethod
    def validate_term(cls, v):
        if not isinstance(v, str):
            raise ValueError("term must be a string")
        v = v.strip()
        if not v:
            raise ValueError("term cannot be empty")
        return v

    @field_validator("emails", mode="before")
    @classmethod
    def normalize_emails(cls, v):
        """Lower-case and trim; drop non-strings and values without '@'."""
        if not isinstance(v, list):
            return []
        emails = []
        for email in v:
            if not isinstance(email, str):
                continue
            email = email.strip().lower()
            if "@" in email:
                emails.append(email)
        return emails


class VisibilityTermItem(BaseModel):
    """Stored visibility term."""

    term: str
    emails: List[str]

    model_config = ConfigDict(from_attributes=True)


class SyncRequest(BaseModel):
    """Body of POST /api/notes.

    Items are kept raw here and validated one by one so a single bad item
    does not reject the whole sync.
    """

    notes: List[Any] = Field(default_factory=list)
    visibility_terms: Optional[List[Any]] = Field(default=None, alias="visibilityTerms")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "notes": [
                    {
                        "id": "n1",
                        "markdown": "---\nvisibility: [friends]\n---\nHello",
                        "sourceName": "hello.md",
                        "lastModified": 1726000000000,
                    }
                ],
                "visibilityTerms": [{"term": "friends", "emails": ["alice@example.com"]}],
            }
        },
    )

    @field_validator("notes", mode="before")
    @classmethod
    def notes_list(cls, v):
        return v if isinstance(v, list) else []

    @field_validator("visibility_terms", mode="before")
    @classmethod
    def terms_list(cls, v):
        return v if isinstance(v, list) else None


class StoredNote(BaseModel):
    """Persisted note as returned to its owner."""

    id: str
    markdown: str
    source_name: Optional[str] = Field(default=None, alias="sourceName")
    last_modified: int = Field(alias="lastModified")

    model_config = ConfigDict(populate_by_name=True)


class NotesResponse(BaseModel):
    """Owner's notes plus visibility terms."""

    notes: List[StoredNote]
    visibility_terms: List[VisibilityTermItem] = Field(alias="visibilityTerms")

    model_config = ConfigDict(populate_by_name=True)


class SharedNotesResponse(BaseModel):
    """Notes other users shared with the caller."""

    notes: List[NoteRecord]


class StatusResponse(BaseModel):
    status: str
