"""Data Transfer Objects for the retriever.

ORM rows are converted to these models while the session is still open, so
scoring, reason generation and response building never touch the database.
"""

from typing import List, Optional, Union

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


# Internal fields stay snake_case; JSON output is camelCase like the directory's web client expects
OUTPUT_MODEL_CONFIG = ConfigDict(
    from_attributes=True,
    alias_generator=AliasGenerator(serialization_alias=to_camel),
)


class BusinessRecord(BaseModel):
    """A directory entry, read-only from the matchmaking core's perspective."""
    model_config = OUTPUT_MODEL_CONFIG

    id: Union[int, str]
    name: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    verified: bool = False
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)
    employees_count: Optional[int] = Field(None, ge=0)
    founded_year: Optional[int] = None
    project_budget_min: Optional[float] = Field(None, ge=0)
    project_budget_max: Optional[float] = Field(None, ge=0)
    website: Optional[str] = None

    @field_validator('tags', 'certifications', mode='before')
    @classmethod
    def _none_to_empty_list(cls, value):
        return [] if value is None else value

    @field_validator('verified', mode='before')
    @classmethod
    def _none_to_false(cls, value):
        return False if value is None else value

    @model_validator(mode='after')
    def _check_budget_range(self) -> 'BusinessRecord':
        if (
            self.project_budget_min is not None
            and self.project_budget_max is not None
            and self.project_budget_min > self.project_budget_max
        ):
            raise ValueError("project_budget_min must not exceed project_budget_max")
        return self

    def capability_texts(self) -> List[str]:
        """Description, category, tags and certifications as separate strings."""
        texts = []
        if self.description:
            texts.append(self.description)
        if self.category:
            texts.append(self.category)
        texts.extend(self.tags)
        texts.extend(self.certifications)
        return texts

    def searchable_text(self) -> str:
        """Lower-cased concatenation of every field a keyword query can hit."""
        parts = [self.name, self.description, self.category, self.location, *self.tags]
        return " ".join(p for p in parts if p).lower()


class SimilarityHit(BaseModel):
    """Raw vector-search hit as returned by the semantic_search_only task."""
    model_config = OUTPUT_MODEL_CONFIG

    id: str
    business_id: Union[int, str]
    name: Optional[str] = None
    description: Optional[str] = None
    similarity: float = Field(ge=0, le=1)
