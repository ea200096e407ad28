"""Analysis service layer: run the pipeline over a stored dataset."""

import random
import uuid

from cortexcloud.core.config import settings
from cortexcloud.core.errors import ForbiddenError, NotFoundError
from cortexcloud.core.logging import bind_context, get_logger
from cortexcloud.core.schemas import AnalysisStatus, DatasetStatus
from cortexcloud.db.models import Analysis, Dataset, User, utcnow
from cortexcloud.db.store import Store
from cortexcloud.processing import analyze_table

from .datasets import get_owned_dataset

logger = get_logger(__name__)


async def _set_analysis_state(
    store: Store,
    analysis_id: uuid.UUID,
    *,
    status: AnalysisStatus,
    progress: int | None = None,
    **changes: object,
) -> Analysis:
    if progress is not None:
        changes["progress"] = progress
    updated = await store.update_analysis(analysis_id, status=status, **changes)
    if updated is None:
        raise NotFoundError("Analysis not found.")
    logger.info(
        "analyses.state.changed",
        analysis_id=str(analysis_id),
        status=status.value,
        progress=updated.progress,
    )
    return updated


async def run_analysis(
    store: Store,
    user: User,
    dataset_id: uuid.UUID,
    rng: random.Random | None = None,
) -> Analysis:
    """Analyze a dataset end to end and record the results.

    The run is synchronous: the returned analysis is already ``completed``.
    A missing source file marks the analysis ``error`` and raises not-found.
    """
    dataset = await get_owned_dataset(store, user, dataset_id)
    bind_context(dataset_id=str(dataset.id))

    analysis = await store.create_analysis(Analysis(dataset_id=dataset.id, user_id=user.id))
    logger.info("analyses.run.created", analysis_id=str(analysis.id))

    content = await store.get_file(dataset.storage_key)
    if content is None:
        await _set_analysis_state(
            store, analysis.id, status=AnalysisStatus.error, error="Dataset file not found."
        )
        raise NotFoundError("Dataset file not found.")

    await _set_analysis_state(store, analysis.id, status=AnalysisStatus.preprocessing, progress=25)

    try:
        results = analyze_table(
            content,
            dataset.columns,
            content_type=dataset.content_type,
            rng=rng,
            chart_points=settings.chart_points,
        )
    except Exception as exc:
        logger.exception("analyses.run.failed", analysis_id=str(analysis.id), exc_info=exc)
        await _set_analysis_state(store, analysis.id, status=AnalysisStatus.error, error=str(exc))
        await store.update_dataset(dataset.id, status=DatasetStatus.error)
        raise

    completed = await _set_analysis_state(
        store,
        analysis.id,
        status=AnalysisStatus.completed,
        progress=100,
        results=results,
        completed_at=utcnow(),
    )
    await store.update_dataset(dataset.id, status=DatasetStatus.analyzed)
    logger.info(
        "analyses.run.completed",
        analysis_id=str(analysis.id),
        numeric_columns=results.summary.numeric_columns,
        anomalies=len(results.anomalies),
    )
    return completed


async def get_owned_analysis(
    store: Store,
    user: User,
    analysis_id: uuid.UUID,
) -> tuple[Analysis, Dataset | None]:
    """Return an analysis owned by ``user`` plus its dataset, if it still exists."""
    analysis = await store.get_analysis(analysis_id)
    if analysis is None:
        raise NotFoundError("Analysis not found.")
    if analysis.user_id != user.id:
        raise ForbiddenError()
    return analysis, await store.get_dataset(analysis.dataset_id)
