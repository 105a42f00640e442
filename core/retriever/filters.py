"""Structured search filters shared by the retriever, repositories and facets."""

import re
from typing import List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

_EMPLOYEE_RANGE = re.compile(r'^\s*(\d+)\s*(?:-\s*(\d+)|\+)\s*$')


def parse_employee_range(value: str) -> Tuple[int, Optional[int]]:
    """Parse '11-50' -> (11, 50) and '500+' -> (500, None)."""
    match = _EMPLOYEE_RANGE.match(value or '')
    if not match:
        raise ValueError(f"Invalid employee range: {value!r}")
    low = int(match.group(1))
    high = int(match.group(2)) if match.group(2) else None
    if high is not None and high < low:
        raise ValueError(f"Invalid employee range: {value!r}")
    return low, high


class SearchFilters(BaseModel):
    """Exact/substring filters over the business catalog."""
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    category: Optional[str] = Field(None, validation_alias=AliasChoices('category', 'industry'))
    location: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    verified: Optional[bool] = None
    rating: Optional[float] = Field(None, ge=0, le=5, description="Minimum rating")
    founded_after: Optional[int] = Field(None, validation_alias=AliasChoices('founded_after', 'foundedAfter'))
    employee_range: Optional[str] = Field(None, validation_alias=AliasChoices('employee_range', 'employeeRange'))

    @field_validator('category', 'location', 'employee_range', mode='before')
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator('tags', mode='before')
    @classmethod
    def _clean_tags(cls, value):
        if value is None:
            return []
        return [t for t in value if isinstance(t, str) and t.strip()]

    @field_validator('employee_range')
    @classmethod
    def _check_employee_range(cls, value):
        if value is not None:
            parse_employee_range(value)
        return value

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_defaults=True)

    def without(self, dimension: str) -> 'SearchFilters':
        """Copy of these filters with one facet dimension removed."""
        return self.model_copy(update={dimension: None})
