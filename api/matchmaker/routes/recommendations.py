from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import sessionmaker

from ..deps import get_session_factory
from ..schemas import MAX_ID, Preferences, RecommendationOut
from ..services.recommendations import recommend

router = APIRouter()


@router.post("/recommendations/{user_id}", response_model=list[RecommendationOut])
def get_recommended_users(
    user_id: int = Path(gt=0, le=MAX_ID),
    preferences: Preferences | None = Body(default=None),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> list[RecommendationOut]:
    return recommend(session_factory, user_id, preferences or Preferences())
