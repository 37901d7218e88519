from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Gender = Literal["male", "female", "other"]

# ids are INTEGER columns (32-bit on Postgres)
MAX_ID = 2**31 - 1
UserId = Annotated[int, Field(gt=0, le=MAX_ID)]


class UserIn(BaseModel):
    name: str = Field(max_length=100)
    gender: Gender
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    diet_type: str | None = Field(default=None, max_length=50)
    age: int = Field(gt=0)


class LikeRequest(BaseModel):
    user_id: UserId
    liked_user_id: UserId


class MatchPair(BaseModel):
    user_id: int
    matched_user_id: int


class LikeResponse(BaseModel):
    status: Literal["like registered", "match found"]
    match: MatchPair | None = None


class AgeRange(BaseModel):
    min: int | None = Field(default=None, ge=-MAX_ID, le=MAX_ID)
    max: int | None = Field(default=None, ge=-MAX_ID, le=MAX_ID)


class Preferences(BaseModel):
    looking_for_gender: Gender | None = None
    looking_for_diet_type: str | None = None
    age_range: AgeRange | None = None
    max_distance: float | None = None

    @field_validator("looking_for_gender", mode="before")
    @classmethod
    def _blank_gender_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class RecommendationOut(BaseModel):
    id: int
    name: str | None
    gender: str
    latitude: float
    longitude: float
    diet_type: str | None
    age: int
    distance: float


class MatchOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    matched_user_id: int
    created_at: datetime
