"""Stored records for users, datasets, analyses and chat messages."""

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from cortexcloud.core.schemas import (
    AnalysisResult,
    AnalysisStatus,
    ChatContext,
    ChatRole,
    DatasetStatus,
)


def utcnow() -> datetime:
    return datetime.now(UTC)


class Record(BaseModel):
    """Base for stored entities: a UUID identity plus audit timestamps."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class User(Record):
    email: str
    name: str
    password_hash: str


class Dataset(Record):
    """Metadata for an uploaded file; the content lives under ``storage_key``."""

    user_id: uuid.UUID
    filename: str
    content_type: str
    size_bytes: int
    checksum_sha256: str
    storage_key: str
    status: DatasetStatus = DatasetStatus.uploaded
    row_count: int = 0
    column_count: int = 0
    columns: list[str] = Field(default_factory=list)


class Analysis(Record):
    """One analysis run over a dataset."""

    dataset_id: uuid.UUID
    user_id: uuid.UUID
    status: AnalysisStatus = AnalysisStatus.pending
    progress: int = Field(default=0, ge=0, le=100)
    results: AnalysisResult | None = None
    error: str | None = None
    completed_at: datetime | None = None


class ChatMessage(Record):
    user_id: uuid.UUID
    role: ChatRole
    content: str
    context: ChatContext | None = None
