"""Dataset API routes for upload, listing, retrieval and deletion."""

import uuid
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, File, UploadFile, status

from cortexcloud.api.deps import T_CurrentUser, T_Store
from cortexcloud.core.errors import MissingFilenameError
from cortexcloud.core.logging import bind_context, get_logger
from cortexcloud.core.schemas import (
    AnalysisBrief,
    DatasetDetail,
    DatasetList,
    DatasetPublic,
    DatasetUploadPublic,
    ErrorResponse,
    Message,
)
from cortexcloud.services import datasets as datasets_service
from cortexcloud.utils.checksum import read_with_checksum

router = APIRouter(
    prefix="/datasets",
    tags=["datasets"],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
logger = get_logger(__name__)


@router.post("", response_model=DatasetUploadPublic, status_code=status.HTTP_201_CREATED)
async def upload_dataset(
    store: T_Store,
    user: T_CurrentUser,
    file: Annotated[UploadFile, File(...)],
) -> DatasetUploadPublic:
    """Store an uploaded CSV/JSON file and record its metadata."""
    if not file.filename:
        raise MissingFilenameError()

    filename = Path(file.filename).name
    content_type = datasets_service.resolve_content_type(file.content_type, filename)
    logger.info("dataset.upload.received", filename=filename, content_type=content_type)

    payload, checksum_sha256 = await read_with_checksum(file)
    dataset = await datasets_service.create_dataset(
        store,
        user,
        filename=filename,
        content_type=content_type,
        payload=payload,
        checksum_sha256=checksum_sha256,
    )
    return DatasetUploadPublic(
        message="File uploaded successfully",
        dataset=DatasetPublic.model_validate(dataset),
    )


@router.get("", response_model=DatasetList)
async def list_datasets(store: T_Store, user: T_CurrentUser) -> DatasetList:
    datasets = await datasets_service.list_datasets(store, user)
    return DatasetList(
        datasets=[DatasetPublic.model_validate(dataset) for dataset in datasets],
        total=len(datasets),
    )


@router.get("/{dataset_id}", response_model=DatasetDetail)
async def get_dataset(
    store: T_Store,
    user: T_CurrentUser,
    dataset_id: uuid.UUID,
) -> DatasetDetail:
    """Return dataset metadata with its analysis runs, newest first."""
    bind_context(dataset_id=str(dataset_id))
    dataset, analyses = await datasets_service.get_dataset_detail(store, user, dataset_id)
    return DatasetDetail(
        dataset=DatasetPublic.model_validate(dataset),
        analyses=[AnalysisBrief.model_validate(analysis) for analysis in analyses],
    )


@router.delete("/{dataset_id}", response_model=Message)
async def delete_dataset(
    store: T_Store,
    user: T_CurrentUser,
    dataset_id: uuid.UUID,
) -> Message:
    bind_context(dataset_id=str(dataset_id))
    await datasets_service.delete_dataset(store, user, dataset_id)
    return Message(message="Dataset deleted successfully")
