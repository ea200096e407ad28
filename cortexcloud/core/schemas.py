"""Pydantic schemas and enums used by the API, services and analysis pipeline."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Message(BaseModel):
    """Generic success message response."""

    message: str


class ErrorResponse(BaseModel):
    detail: str


class DatasetStatus(str, Enum):
    """Lifecycle states of an uploaded dataset."""

    uploaded = "uploaded"
    processing = "processing"
    analyzed = "analyzed"
    error = "error"


class AnalysisStatus(str, Enum):
    """Lifecycle states of a single analysis run."""

    pending = "pending"
    preprocessing = "preprocessing"
    analyzing = "analyzing"
    generating = "generating"
    completed = "completed"
    error = "error"


class Severity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class ChatRole(str, Enum):
    user = "user"
    assistant = "assistant"


# Analysis result document. Serialized with camelCase keys for the dashboard.


class _ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisSummary(_ResultModel):
    total_rows: int
    total_columns: int
    numeric_columns: int
    categorical_columns: int


class StatisticsRecord(_ResultModel):
    """Descriptive statistics for one numeric column."""

    column: str
    min: float
    max: float
    mean: float
    median: float
    std_dev: float


class TrendFinding(_ResultModel):
    type: str
    description: str
    confidence: int = Field(ge=0, le=100)


class PredictionRecord(_ResultModel):
    """Projected next value for one numeric column."""

    metric: str
    current_value: float
    predicted_value: float
    change: float
    timeframe: str = "Next Period"


class AnomalyFinding(_ResultModel):
    description: str
    severity: Severity
    column: str | None = None
    value: float | None = None


class ChartSeries(_ResultModel):
    """Display series: sampled actual values and inflated predicted values."""

    labels: list[str]
    values: list[float]
    predictions: list[float]


class AnalysisResult(_ResultModel):
    """Aggregate output of one analysis run."""

    summary: AnalysisSummary
    statistics: list[StatisticsRecord]
    trends: list[TrendFinding]
    predictions: list[PredictionRecord]
    anomalies: list[AnomalyFinding]
    insights: list[str]
    chart_data: ChartSeries


# Users and authentication.


class UserRegister(BaseModel):
    """Input schema for account registration."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def name_validate(cls, value: str) -> str:
        """Normalize and validate user name values."""
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def email_validate(cls, value: str) -> str:
        """Require a plausible address and store it lower-cased."""
        value = value.strip().lower()
        if "@" not in value:
            raise ValueError("Invalid email format")
        return value


class UserLogin(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    created_at: datetime


class AuthPublic(BaseModel):
    """Response returned after a successful registration or login."""

    message: str
    user: UserPublic
    token: str


class UserStats(BaseModel):
    total_datasets: int
    total_analyses: int
    completed_analyses: int
    total_insights: int


class ProfilePublic(BaseModel):
    user: UserPublic
    stats: UserStats


# Datasets.


class DatasetPublic(BaseModel):
    """Public dataset metadata."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    filename: str
    size_bytes: int
    checksum_sha256: str
    row_count: int
    column_count: int
    columns: list[str]
    status: DatasetStatus
    created_at: datetime


class DatasetUploadPublic(BaseModel):
    message: str
    dataset: DatasetPublic


class DatasetList(BaseModel):
    """List wrapper for dataset responses."""

    datasets: list[DatasetPublic]
    total: int


class AnalysisBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    status: AnalysisStatus
    progress: int = Field(ge=0, le=100)
    created_at: datetime
    completed_at: datetime | None = None


class DatasetDetail(BaseModel):
    dataset: DatasetPublic
    analyses: list[AnalysisBrief]


# Analyses.


class AnalysisRunInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    dataset_id: UUID
    status: AnalysisStatus
    progress: int = Field(ge=0, le=100)


class AnalysisRunPublic(BaseModel):
    """Response model for the run-analysis endpoint."""

    message: str
    analysis: AnalysisRunInfo


class AnalysisPublic(BaseModel):
    """Full analysis record including results, when available."""

    id: UUID
    dataset_id: UUID
    dataset_name: str
    status: AnalysisStatus
    progress: int = Field(ge=0, le=100)
    results: AnalysisResult | None = None
    error: str | None = None
    created_at: datetime
    completed_at: datetime | None = None


class AnalysisEnvelope(BaseModel):
    analysis: AnalysisPublic


# Assistant.


class ChatContext(BaseModel):
    dataset_id: UUID | None = None
    analysis_id: UUID | None = None


class ChatRequest(BaseModel):
    """Input schema for a chat message."""

    message: str = Field(min_length=1)
    context: ChatContext | None = None

    @field_validator("message")
    @classmethod
    def message_validate(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be blank")
        return value


class ChatMessagePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    role: ChatRole
    content: str
    context: ChatContext | None = None
    created_at: datetime


class ChatReply(BaseModel):
    message: ChatMessagePublic
    response: str


class ChatHistory(BaseModel):
    messages: list[ChatMessagePublic]
