"""Analysis API routes: run the pipeline and fetch results."""

import uuid

from fastapi import APIRouter

from cortexcloud.api.deps import T_CurrentUser, T_Rng, T_Store
from cortexcloud.core.logging import bind_context, get_logger
from cortexcloud.core.schemas import (
    AnalysisEnvelope,
    AnalysisPublic,
    AnalysisRunInfo,
    AnalysisRunPublic,
    ErrorResponse,
)
from cortexcloud.services import analyses as analyses_service

router = APIRouter(
    prefix="/analyses",
    tags=["analyses"],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
logger = get_logger(__name__)

UNKNOWN_DATASET_NAME = "Unknown"


@router.post("/run/{dataset_id}", response_model=AnalysisRunPublic)
async def run_analysis(
    store: T_Store,
    user: T_CurrentUser,
    rng: T_Rng,
    dataset_id: uuid.UUID,
) -> AnalysisRunPublic:
    """Analyze a dataset synchronously and return the finished run."""
    bind_context(dataset_id=str(dataset_id))
    logger.info("analysis.run.requested")
    analysis = await analyses_service.run_analysis(store, user, dataset_id, rng=rng)
    return AnalysisRunPublic(
        message="Analysis started",
        analysis=AnalysisRunInfo.model_validate(analysis),
    )


@router.get("/{analysis_id}", response_model=AnalysisEnvelope)
async def get_analysis(
    store: T_Store,
    user: T_CurrentUser,
    analysis_id: uuid.UUID,
) -> AnalysisEnvelope:
    bind_context(analysis_id=str(analysis_id))
    analysis, dataset = await analyses_service.get_owned_analysis(store, user, analysis_id)
    return AnalysisEnvelope(
        analysis=AnalysisPublic(
            id=analysis.id,
            dataset_id=analysis.dataset_id,
            dataset_name=dataset.filename if dataset else UNKNOWN_DATASET_NAME,
            status=analysis.status,
            progress=analysis.progress,
            results=analysis.results,
            error=analysis.error,
            created_at=analysis.created_at,
            completed_at=analysis.completed_at,
        )
    )
