from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import sessionmaker

from ..deps import get_session_factory
from ..schemas import MAX_ID, MatchOut
from ..services.likes import list_matches

router = APIRouter()


@router.get("/matches/{user_id}", response_model=list[MatchOut])
def get_matches(user_id: int = Path(gt=0, le=MAX_ID), session_factory: sessionmaker = Depends(get_session_factory)) -> list[MatchOut]:
    return [MatchOut.model_validate(m) for m in list_matches(session_factory, user_id)]
