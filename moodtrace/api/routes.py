"""
FastAPI routes for the MoodTrace REST API.

Handlers are coroutines so every session mutation runs on the event loop,
one at a time.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from .schemas import (
    EntryResponse,
    HealthResponse,
    HistoryResponse,
    SampleInput,
    StateResponse,
    SubmitResponse,
)
from .dependencies import AppState, get_app_state, get_session
from ..engine.session import MoodSession


router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Health check endpoint"
)
async def health_check(state: AppState = Depends(get_app_state)):
    return HealthResponse(
        status="healthy",
        version=state.config.versioning.version,
        samples_seen=state.session.history.total_appended
    )


@router.get(
    "/state",
    response_model=StateResponse,
    tags=["Mood"],
    summary="Current emotion, anomaly flag and baseline"
)
async def get_state(session: MoodSession = Depends(get_session)):
    """
    Read the latest emotion classification and anomaly signal.

    Before any sample has been submitted the emotion is Neutral (0.5) and
    the baseline sits at valence = energy = 0.5.
    """
    return StateResponse.from_session(session)


@router.get(
    "/history",
    response_model=HistoryResponse,
    tags=["Mood"],
    summary="Rolling session history, oldest first"
)
async def get_history(session: MoodSession = Depends(get_session)):
    return HistoryResponse(
        entries=[EntryResponse.from_entry(e) for e in session.history_snapshot()],
        capacity=session.history.capacity
    )


@router.post(
    "/samples",
    response_model=SubmitResponse,
    tags=["Mood"],
    summary="Submit the audio features of a track"
)
async def submit_sample(sample_input: SampleInput, state: AppState = Depends(get_app_state)):
    """
    Feed one sample through classification and baseline tracking.

    **Parameters:**
    - **label**: track name shown in the history
    - **valence**, **energy**: 0.0-1.0; missing values default to 0.5,
      out-of-range values are clamped
    - **tempo**: BPM, descriptive only
    """
    try:
        sample, validation = state.validator.validate_payload(
            sample_input.model_dump(exclude={"label"}, exclude_none=True)
        )
        entry = state.session.submit_sample(sample, sample_input.label)
        return SubmitResponse(
            entry=EntryResponse.from_entry(entry),
            state=StateResponse.from_session(state.session),
            warnings=validation.warnings
        )
    except Exception as e:
        state.logger.error("Failed to submit sample", exc_info=True, track=sample_input.label)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to submit sample: {str(e)}"
        )


@router.post(
    "/anomaly/acknowledge",
    response_model=StateResponse,
    tags=["Mood"],
    summary="Clear the anomaly flag after a journal prompt was answered"
)
async def acknowledge_anomaly(session: MoodSession = Depends(get_session)):
    session.acknowledge_anomaly()
    return StateResponse.from_session(session)
