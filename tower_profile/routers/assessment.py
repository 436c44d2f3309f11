from fastapi import APIRouter, HTTPException, Depends
import logging

from tower_profile.schemas.assessment import ProfileRequest, ReferenceSummary
from tower_profile.engine.engine import ProfileEngine
from tower_profile.engine.models import ProfileResult, ReferenceDataError

router = APIRouter()
logger = logging.getLogger(__name__)


def get_profile_engine() -> ProfileEngine:
    # Reference tables are cached by the loader, so this is cheap per request.
    try:
        return ProfileEngine()
    except ReferenceDataError as e:
        logger.error(f"Reference data configuration error: {e}")
        raise HTTPException(status_code=500, detail=f"Reference data configuration error: {e}")


@router.post("/profile", response_model=ProfileResult)
async def create_profile(
    request: ProfileRequest,
    engine: ProfileEngine = Depends(get_profile_engine),
):
    """
    Scores one completed assessment and returns the full profile.
    Partial selections are accepted; the engine fills documented defaults.
    """
    try:
        result = engine.build_profile(request.model_dump())
        logger.info(f"Profile generated: type {result.primary_type.number}, confidence {result.primary_type.confidence}")
        return result
    except ReferenceDataError as e:
        logger.error(f"Reference data configuration error: {e}")
        raise HTTPException(status_code=500, detail=f"Reference data configuration error: {e}")
    except Exception as e:
        logger.exception(f"Unexpected error while building profile: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/profile/reference", response_model=ReferenceSummary)
async def get_reference_summary(engine: ProfileEngine = Depends(get_profile_engine)):
    """Type names, wing pairs and arrows, for clients rendering the report."""
    tables = engine.tables
    return ReferenceSummary(
        version=tables.version,
        type_names={type_id: desc.name for type_id, desc in tables.type_names.items()},
        wing_pairs=dict(tables.wing_pairs),
        arrows={
            type_id: {"integration": arrow.integration, "disintegration": arrow.disintegration}
            for type_id, arrow in tables.arrows.items()
        },
    )
