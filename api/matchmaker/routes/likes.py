from fastapi import APIRouter, Depends
from sqlalchemy.orm import sessionmaker

from ..deps import get_session_factory
from ..schemas import LikeRequest, LikeResponse
from ..services.likes import register_like

router = APIRouter()


@router.post("/like", response_model=LikeResponse, response_model_exclude_none=True)
def like_user(payload: LikeRequest, session_factory: sessionmaker = Depends(get_session_factory)) -> LikeResponse:
    return register_like(session_factory, payload)
