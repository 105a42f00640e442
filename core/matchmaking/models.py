"""
Matchmaking Models - request union and external-facing results.

MatchRequest is a closed tagged union on `kind`. Payloads are validated once
at the boundary; anything that does not conform is rejected there.
"""

from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from core.retriever.dto import OUTPUT_MODEL_CONFIG, BusinessRecord


class MatchKind(str, Enum):
    B2B = 'b2b'
    CANDIDATE_TO_JOB = 'candidate_to_job'
    STARTUP_TO_INVESTOR = 'startup_to_investor'


BudgetBand = Literal['under-10k', '10k-50k', '50k-100k', '100k-500k', 'over-500k']
SizeBand = Literal['startup', 'small', 'medium', 'large']

_REQUEST_CONFIG = ConfigDict(extra='forbid', populate_by_name=True)


class MatchRequirements(BaseModel):
    """Optional structured requirements attached to a match request."""
    model_config = _REQUEST_CONFIG

    location: Optional[str] = None
    budget_band: Optional[BudgetBand] = Field(
        None, validation_alias=AliasChoices('budget_band', 'budgetBand', 'budget')
    )
    timeline: Optional[str] = None
    industry: Optional[str] = None
    company_size_band: Optional[SizeBand] = Field(
        None, validation_alias=AliasChoices('company_size_band', 'companySizeBand', 'size')
    )

    @field_validator('location', 'timeline', 'industry', 'budget_band', 'company_size_band', mode='before')
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class _MatchRequestBase(BaseModel):
    model_config = _REQUEST_CONFIG

    description: str = Field(
        "", validation_alias=AliasChoices('description', 'free_text_description', 'freeTextDescription')
    )
    requirements: MatchRequirements = Field(default_factory=MatchRequirements)

    @field_validator('description', mode='before')
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator('requirements', mode='before')
    @classmethod
    def _none_to_default(cls, value):
        return {} if value is None else value


class B2BMatchRequest(_MatchRequestBase):
    kind: Literal['b2b'] = 'b2b'


class CandidateToJobRequest(_MatchRequestBase):
    kind: Literal['candidate_to_job'] = 'candidate_to_job'


class StartupToInvestorRequest(_MatchRequestBase):
    kind: Literal['startup_to_investor'] = 'startup_to_investor'


MatchRequest = Annotated[
    Union[B2BMatchRequest, CandidateToJobRequest, StartupToInvestorRequest],
    Field(discriminator='kind'),
]

_match_request_adapter = TypeAdapter(MatchRequest)


def parse_match_request(data: Any) -> Union[B2BMatchRequest, CandidateToJobRequest, StartupToInvestorRequest]:
    """Validate a raw payload into one of the MatchRequest variants.

    Hyphenated kinds ('candidate-to-job') are accepted and normalized.

    Raises:
        pydantic.ValidationError: if the payload does not conform
    """
    if isinstance(data, dict):
        kind = data.get('kind', data.get('type'))
        data = {k: v for k, v in data.items() if k != 'type'}
        if isinstance(kind, str):
            data['kind'] = kind.strip().lower().replace('-', '_')
    return _match_request_adapter.validate_python(data)


class MatchResult(BaseModel):
    """One ranked answer to a match request."""
    model_config = OUTPUT_MODEL_CONFIG

    business: BusinessRecord
    match_score: int = Field(ge=0, le=100)
    match_reasons: List[str] = Field(default_factory=list, max_length=4)
    confidence_level: Literal['high', 'medium', 'low']
    recommendations: List[str] = Field(default_factory=list, max_length=3)
    similarity: Optional[float] = None
    success_probability: Optional[float] = None
