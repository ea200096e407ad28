"""Dataset service layer for uploads, lookups and deletion."""

import uuid
from pathlib import PurePosixPath

from cortexcloud.core.errors import (
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
    StorageError,
    UnsupportedMediaTypeError,
)
from cortexcloud.core.logging import get_logger
from cortexcloud.db.models import Analysis, Dataset, User
from cortexcloud.db.store import Store
from cortexcloud.processing.parsers import (
    CSV_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    InvalidDatasetFormatError,
    decode_payload,
    extract_metadata,
)

ALLOWED_CONTENT_TYPES = {CSV_CONTENT_TYPE, JSON_CONTENT_TYPE}
CONTENT_TYPES_BY_SUFFIX = {".csv": CSV_CONTENT_TYPE, ".json": JSON_CONTENT_TYPE}

logger = get_logger(__name__)


def resolve_content_type(content_type: str | None, filename: str) -> str:
    """Return the effective content type, falling back to the file extension."""
    if content_type is not None and content_type in ALLOWED_CONTENT_TYPES:
        return content_type
    suffix = PurePosixPath(filename).suffix.lower()
    resolved = CONTENT_TYPES_BY_SUFFIX.get(suffix)
    if resolved is None:
        raise UnsupportedMediaTypeError()
    return resolved


def build_storage_key(user_id: uuid.UUID, dataset_id: uuid.UUID, filename: str) -> str:
    return f"uploads/{user_id}/{dataset_id}/{filename}"


async def create_dataset(
    store: Store,
    user: User,
    *,
    filename: str,
    content_type: str,
    payload: bytes,
    checksum_sha256: str,
) -> Dataset:
    """Store an uploaded file and persist its extracted metadata."""
    try:
        text = decode_payload(payload)
        row_count, columns = extract_metadata(content_type, text)
    except InvalidDatasetFormatError as exc:
        logger.info("datasets.create.invalid_format", reason=str(exc))
        raise InvalidRequestError(str(exc)) from exc

    dataset_id = uuid.uuid4()
    storage_key = build_storage_key(user.id, dataset_id, filename)
    try:
        await store.put_file(storage_key, text)
    except Exception as exc:
        logger.exception("datasets.create.storage_failed", storage_key=storage_key, exc_info=exc)
        raise StorageError("Failed to store dataset file.") from exc

    dataset = await store.create_dataset(
        Dataset(
            id=dataset_id,
            user_id=user.id,
            filename=filename,
            content_type=content_type,
            size_bytes=len(payload),
            checksum_sha256=checksum_sha256,
            storage_key=storage_key,
            row_count=row_count,
            column_count=len(columns),
            columns=columns,
        )
    )
    logger.info(
        "datasets.create.completed",
        dataset_id=str(dataset.id),
        row_count=row_count,
        column_count=len(columns),
    )
    return dataset


async def get_owned_dataset(store: Store, user: User, dataset_id: uuid.UUID) -> Dataset:
    """Return a dataset owned by ``user`` or raise not-found / access-denied."""
    dataset = await store.get_dataset(dataset_id)
    if dataset is None:
        raise NotFoundError("Dataset not found.")
    if dataset.user_id != user.id:
        logger.info("datasets.access_denied", dataset_id=str(dataset_id))
        raise ForbiddenError()
    return dataset


async def list_datasets(store: Store, user: User) -> list[Dataset]:
    return await store.list_datasets(user.id)


async def get_dataset_detail(
    store: Store,
    user: User,
    dataset_id: uuid.UUID,
) -> tuple[Dataset, list[Analysis]]:
    dataset = await get_owned_dataset(store, user, dataset_id)
    return dataset, await store.list_analyses_by_dataset(dataset.id)


async def delete_dataset(store: Store, user: User, dataset_id: uuid.UUID) -> None:
    dataset = await get_owned_dataset(store, user, dataset_id)
    await store.delete_dataset(dataset.id)
    logger.info("datasets.delete.completed", dataset_id=str(dataset.id))
