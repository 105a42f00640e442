#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.

The AppContext is built once at startup and kept on app.state; everything a
request needs is derived from it, with one database session per request.
"""

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from core.app_context import AppContext
from core.matchmaking.service import MatchmakingService
from core.retriever.service import CandidateRetriever
from core.router import RequestRouter
from core.search.service import SearchService
from database.repositories import BusinessRepository, EmbeddingRepository


def get_context(request: Request) -> AppContext:
    """The application context wired at startup."""
    return request.app.state.context


def get_db(context: AppContext = Depends(get_context)) -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    session = context.session_factory()
    try:
        yield session
    finally:
        session.close()


def get_retriever(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context)
) -> CandidateRetriever:
    return CandidateRetriever(
        business_repo=BusinessRepository(db),
        embedding_repo=EmbeddingRepository(db),
        embedder=context.embedder,
        config=context.config.retrieval
    )


def get_request_router(
    retriever: CandidateRetriever = Depends(get_retriever),
    context: AppContext = Depends(get_context)
) -> RequestRouter:
    matchmaking = MatchmakingService(
        retriever=retriever,
        scorer=context.scorer,
        reason_generator=context.reason_generator,
        predictor=context.predictor
    )
    return RequestRouter(matchmaking, predictor=context.predictor)


def get_search_service(
    retriever: CandidateRetriever = Depends(get_retriever),
    context: AppContext = Depends(get_context)
) -> SearchService:
    return SearchService(
        retriever=retriever,
        business_repo=retriever.business_repo,
        suggestions=context.suggestions,
        analytics=context.analytics,
        cache=context.cache,
        config=context.config.search,
        retrieval_config=context.config.retrieval
    )
