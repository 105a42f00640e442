#!/usr/bin/env python3
"""
Request Router - task dispatcher behind POST /match.

Accepts `{task, payload}` and answers `{success, data}` or `{success, error}`:
- 400: missing task or payload, unknown task, missing or invalid payload field
- 500: anything else, with a sanitized message (details are only logged)

Tasks:
- find_and_score: retrieve, score and explain businesses for search criteria
- semantic_search_only: raw vector similarity hits
- get_ml_score: success probability for a feature vector
- match: a typed MatchRequest (b2b / candidate_to_job / startup_to_investor)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.exceptions import RetrievalError, ScoringDegraded, UnknownTaskError, ValidationError
from core.matchmaking.models import MatchRequirements, parse_match_request
from core.matchmaking.service import MatchmakingService
from core.prediction import SuccessPredictor, pad_features
from core.retriever.filters import SearchFilters

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"
RETRIEVAL_FAILED = "Failed to retrieve businesses"

TASK_ALIASES = {
    'connector_find_and_score_businesses': 'find_and_score',
    'connector_semantic_search_only': 'semantic_search_only',
    'connector_get_ml_score_for_business': 'get_ml_score',
}

_PAYLOAD_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='forbid')


class SearchCriteria(BaseModel):
    model_config = _PAYLOAD_CONFIG

    query_text: str = ""
    industry: Optional[str] = None
    location: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    kind: str = 'b2b'
    requirements: Optional[MatchRequirements] = None
    similarity_threshold: Optional[float] = Field(None, ge=0, le=1)
    semantic_limit: Optional[int] = Field(None, ge=1, le=100)


class FindAndScorePayload(BaseModel):
    model_config = _PAYLOAD_CONFIG

    search_criteria: SearchCriteria
    limit: int = Field(10, ge=1, le=100)


class SemanticSearchPayload(BaseModel):
    model_config = _PAYLOAD_CONFIG

    query_text: str = Field(min_length=1)
    threshold: Optional[float] = Field(None, ge=0, le=1)
    limit: Optional[int] = Field(None, ge=1, le=100)


class MlScorePayload(BaseModel):
    model_config = _PAYLOAD_CONFIG

    business_features: List[Any]


@dataclass
class RouterResponse:
    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: Any) -> "RouterResponse":
        return cls(200, {"success": True, "data": data})

    @classmethod
    def error(cls, status_code: int, message: str) -> "RouterResponse":
        return cls(status_code, {"success": False, "error": message})


def _field_name(error: dict) -> str:
    return ".".join(str(part) for part in error.get("loc", ())) or "payload"


def validation_error_from(exc: pydantic.ValidationError) -> ValidationError:
    """First pydantic error as a ValidationError naming the offending field."""
    first = exc.errors()[0]
    field_name = _field_name(first)
    if first.get("type") == "missing":
        return ValidationError(f"Missing required field: {field_name}", field=field_name)
    return ValidationError(f"Invalid field {field_name}: {first.get('msg')}", field=field_name)


def _dump(items) -> List[Dict[str, Any]]:
    return [item.model_dump(mode='json', by_alias=True) for item in items]


class RequestRouter:
    """Stateless dispatcher; one instance per request is fine."""

    def __init__(self, matchmaking: MatchmakingService, predictor: Optional[SuccessPredictor] = None):
        self.matchmaking = matchmaking
        self.predictor = predictor
        self._handlers: Dict[str, Callable[[Dict[str, Any]], Any]] = {
            'find_and_score': self._find_and_score,
            'semantic_search_only': self._semantic_search_only,
            'get_ml_score': self._get_ml_score,
            'match': self._match,
        }

    @property
    def tasks(self) -> List[str]:
        return sorted(self._handlers)

    def dispatch(self, body: Any) -> RouterResponse:
        """Validate the envelope, run the task and wrap the result."""
        try:
            handler, payload = self._resolve(body)
            return RouterResponse.ok(handler(payload))
        except pydantic.ValidationError as e:
            err = validation_error_from(e)
            logger.info(f"Rejected request: {err}")
            return RouterResponse.error(400, str(err))
        except ValidationError as e:
            logger.info(f"Rejected request: {e}")
            return RouterResponse.error(400, str(e))
        except RetrievalError as e:
            logger.error(f"Retrieval failed: {e}", exc_info=True)
            return RouterResponse.error(500, RETRIEVAL_FAILED)
        except ScoringDegraded as e:
            logger.warning(f"Required scoring input unavailable: {e}")
            return RouterResponse.error(500, str(e))
        except Exception:
            logger.exception("Unhandled error while dispatching request")
            return RouterResponse.error(500, INTERNAL_ERROR)

    def _resolve(self, body: Any):
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object", field="body")

        task = body.get("task")
        if not isinstance(task, str) or not task.strip():
            raise ValidationError("Missing required field: task", field="task")

        task = task.strip()
        handler = self._handlers.get(TASK_ALIASES.get(task, task))
        if handler is None:
            raise UnknownTaskError(task)

        payload = body.get("payload")
        if not isinstance(payload, dict):
            raise ValidationError("Missing required field: payload", field="payload")

        return handler, payload

    def _find_and_score(self, payload: Dict[str, Any]):
        params = FindAndScorePayload.model_validate(payload)
        criteria = params.search_criteria

        requirements = criteria.requirements or MatchRequirements()
        requirements = requirements.model_copy(update={
            'industry': requirements.industry or criteria.industry,
            'location': requirements.location or criteria.location,
        })

        request = parse_match_request({
            'kind': criteria.kind,
            'description': criteria.query_text,
            'requirements': requirements.model_dump(),
        })
        filters = SearchFilters(
            category=criteria.industry,
            location=criteria.location,
            tags=criteria.tags
        )

        results = self.matchmaking.find_matches(
            request,
            limit=params.limit,
            filters=None if filters.is_empty() else filters,
            similarity_threshold=criteria.similarity_threshold,
            semantic_limit=criteria.semantic_limit
        )
        return _dump(results)

    def _semantic_search_only(self, payload: Dict[str, Any]):
        params = SemanticSearchPayload.model_validate(payload)
        try:
            hits = self.matchmaking.retriever.semantic_search(
                params.query_text,
                threshold=params.threshold,
                limit=params.limit
            )
        except ScoringDegraded as e:
            logger.warning(f"Semantic search unavailable: {e}")
            raise ScoringDegraded("Semantic search is unavailable") from e
        return _dump(hits)

    def _get_ml_score(self, payload: Dict[str, Any]) -> float:
        params = MlScorePayload.model_validate(payload)
        if self.predictor is None:
            raise ScoringDegraded("ML scoring is not configured")

        features = pad_features(params.business_features)
        try:
            return self.predictor.predict(features)
        except ScoringDegraded as e:
            logger.warning(f"ML scoring failed: {e}")
            raise ScoringDegraded("ML scoring is unavailable") from e

    def _match(self, payload: Dict[str, Any]):
        payload = dict(payload)
        limit = payload.pop('limit', 10)
        if not isinstance(limit, int) or isinstance(limit, bool) or not 1 <= limit <= 100:
            raise ValidationError("Invalid field limit: must be an integer between 1 and 100", field="limit")

        request = parse_match_request(payload)
        return _dump(self.matchmaking.find_matches(request, limit=limit))
