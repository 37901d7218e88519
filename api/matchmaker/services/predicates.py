from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from sqlalchemy import and_
from sqlalchemy.sql.elements import ColumnElement

from ..errors import InvalidInput
from ..models import User
from ..schemas import Preferences


@dataclass(frozen=True)
class NoFilter:
    pass


@dataclass(frozen=True)
class Equals:
    value: Any


@dataclass(frozen=True)
class Between:
    low: Any
    high: Any


Filter = Union[NoFilter, Equals, Between]


def _text_filter(value: str | None) -> Filter:
    v = (value or "").strip()
    return Equals(v) if v else NoFilter()


def _age_filter(low: int | None, high: int | None) -> Filter:
    if low is None or high is None or low <= 0 or high <= 0:
        return NoFilter()
    return Between(low, high)


def clause_for(column, flt: Filter) -> ColumnElement | None:
    if isinstance(flt, Equals):
        return column == flt.value
    if isinstance(flt, Between):
        return column.between(flt.low, flt.high)
    return None


@dataclass(frozen=True)
class CandidateFilters:
    """Conjunction of optional filters over the users table plus the distance bound."""

    gender: Filter = field(default_factory=NoFilter)
    diet_type: Filter = field(default_factory=NoFilter)
    age: Filter = field(default_factory=NoFilter)
    max_distance: float | None = None

    def where(self, exclude_user_id: int) -> ColumnElement:
        clauses = [User.id != exclude_user_id]
        for column, flt in ((User.gender, self.gender), (User.diet_type, self.diet_type), (User.age, self.age)):
            clause = clause_for(column, flt)
            if clause is not None:
                clauses.append(clause)
        return and_(*clauses)

    def within_distance(self, value: float) -> bool:
        return self.max_distance is None or value <= self.max_distance


def _age_bounds(preferences: Preferences) -> tuple[int | None, int | None]:
    if preferences.age_range is None:
        return None, None
    return preferences.age_range.min, preferences.age_range.max


def validate_preferences(preferences: Preferences) -> None:
    low, high = _age_bounds(preferences)
    if isinstance(_age_filter(low, high), Between) and low > high:
        raise InvalidInput("Invalid age range")


def build_candidate_filters(preferences: Preferences) -> CandidateFilters:
    validate_preferences(preferences)
    max_distance = preferences.max_distance
    return CandidateFilters(
        gender=_text_filter(preferences.looking_for_gender),
        diet_type=_text_filter(preferences.looking_for_diet_type),
        age=_age_filter(*_age_bounds(preferences)),
        max_distance=max_distance if max_distance is not None and max_distance > 0 else None,
    )
