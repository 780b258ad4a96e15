"""HTTP API over the reaction store and the AI tutor."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from orgreact import __version__, schemas
from orgreact.config import Settings, get_settings
from orgreact.errors import NotFoundError, TutorError
from orgreact.store import ReactionStore
from orgreact.tutor import AITutor

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> ReactionStore:
    return request.app.state.store


def get_tutor(request: Request) -> AITutor:
    tutor = request.app.state.tutor
    if tutor is None:
        raise HTTPException(status_code=503, detail="AI tutor is not configured")
    return tutor


@router.get("/reactions", response_model=list[schemas.ReactionRead])
def list_reactions(
    search: Optional[str] = None,
    group: Optional[str] = None,
    chapter: Optional[int] = None,
    bookmarked: bool = False,
    store: ReactionStore = Depends(get_store),
):
    """All reactions matching every filter given."""
    reactions = store.search_reactions(search) if search is not None else store.all_reactions()
    if group:
        wanted = {r.id for r in store.reactions_by_functional_group(group)}
        reactions = [r for r in reactions if r.id in wanted]
    if chapter is not None:
        reactions = [r for r in reactions if r.chapter == chapter]
    if bookmarked:
        reactions = [r for r in reactions if r.is_bookmarked]
    return reactions


@router.get("/reactions/{reaction_id}", response_model=schemas.ReactionRead)
def get_reaction(reaction_id: int, store: ReactionStore = Depends(get_store)):
    return store.get_reaction(reaction_id)


@router.post("/reactions/{reaction_id}/bookmark", response_model=schemas.ReactionRead)
def toggle_bookmark(reaction_id: int, store: ReactionStore = Depends(get_store)):
    return store.toggle_bookmark(reaction_id)


@router.get("/reactions/{reaction_id}/compounds", response_model=schemas.ReactionCompoundsRead)
def reaction_compounds(reaction_id: int, store: ReactionStore = Depends(get_store)):
    store.get_reaction(reaction_id)
    return store.compounds_by_reaction(reaction_id)


@router.get("/compounds", response_model=list[schemas.CompoundRead])
def list_compounds(search: str = "", store: ReactionStore = Depends(get_store)):
    return store.search_compounds(search)


@router.get("/compounds/{compound_id}", response_model=schemas.CompoundRead)
def get_compound(compound_id: int, store: ReactionStore = Depends(get_store)):
    return store.get_compound(compound_id)


@router.get("/compounds/{compound_id}/reactions", response_model=schemas.CompoundReactionsRead)
def compound_reactions(compound_id: int, store: ReactionStore = Depends(get_store)):
    store.get_compound(compound_id)
    return store.reactions_by_compound(compound_id)


@router.post("/ai/tutor", response_model=schemas.TutorReply)
def ask_tutor(payload: schemas.TutorRequest, tutor: AITutor = Depends(get_tutor)):
    if not payload.question.strip():
        raise HTTPException(status_code=400, detail="Question must not be empty")
    return schemas.TutorReply(response=tutor.tutor_response(payload.question))


@router.post("/ai/explain", response_model=schemas.TutorReply)
def explain_reaction(payload: schemas.ExplainRequest, tutor: AITutor = Depends(get_tutor)):
    if not payload.query.strip():
        raise HTTPException(status_code=400, detail="Query must not be empty")
    return schemas.TutorReply(response=tutor.reaction_explanation(payload.query))


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": str(exc)})


async def _tutor_failed(request: Request, exc: TutorError) -> JSONResponse:
    logger.error("Tutor request to %s failed: %s", request.url.path, exc.__cause__ or exc)
    return JSONResponse(status_code=502, content={"message": str(exc)})


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if app.state.tutor is not None:
        app.state.tutor.close()


def create_app(store: ReactionStore, tutor: AITutor | None = None) -> FastAPI:
    """Build the API around an already initialized store."""
    app = FastAPI(title="OrgReact API", version=__version__, lifespan=lifespan)
    app.state.store = store
    app.state.tutor = tutor
    app.include_router(router, prefix="/api")
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(TutorError, _tutor_failed)
    return app


def build_app(settings: Settings | None = None) -> FastAPI:
    """Application factory used by ``orgreact serve``."""
    settings = settings or get_settings()
    store = ReactionStore.from_seed_file(settings.seed_file)
    return create_app(store, AITutor.from_settings(settings))
