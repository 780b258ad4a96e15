"""Command-line entrypoints for OrgReact."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
import uvicorn
from pydantic import BaseModel

from orgreact import schemas
from orgreact.config import get_settings
from orgreact.errors import NotFoundError, TutorError
from orgreact.store import ReactionStore
from orgreact.tutor import AITutor

app = typer.Typer(add_completion=False, help="Organic reaction reference and AI tutor.")

SeedFileOption = Annotated[
    Optional[Path],
    typer.Option("--seed-file", help="JSON file of reactions to load instead of the bundled set."),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _load_store(seed_file: Path | None) -> ReactionStore:
    return ReactionStore.from_seed_file(seed_file or get_settings().seed_file)


def _echo(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _dump(schema: type[BaseModel], obj: Any) -> dict[str, Any]:
    return schema.model_validate(obj).model_dump(by_alias=True)


def _fail(message: str) -> None:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


@app.command("list")
def list_reactions(
    group: Annotated[Optional[str], typer.Option(help="Functional group, e.g. Alkene.")] = None,
    chapter: Annotated[Optional[int], typer.Option(help="Chapter number.")] = None,
    seed_file: SeedFileOption = None,
) -> None:
    """List reactions, optionally filtered by functional group or chapter."""
    store = _load_store(seed_file)
    reactions = store.reactions_by_functional_group(group) if group else store.all_reactions()
    if chapter is not None:
        reactions = [r for r in reactions if r.chapter == chapter]
    _echo([_dump(schemas.ReactionRead, r) for r in reactions])


@app.command()
def show(
    reaction_id: Annotated[int, typer.Argument(help="Reaction id.")],
    seed_file: SeedFileOption = None,
) -> None:
    """Show one reaction with its reactants and products."""
    store = _load_store(seed_file)
    try:
        reaction = store.get_reaction(reaction_id)
    except NotFoundError as exc:
        _fail(str(exc))
    payload = _dump(schemas.ReactionRead, reaction)
    payload["compounds"] = _dump(schemas.ReactionCompoundsRead, store.compounds_by_reaction(reaction_id))
    _echo(payload)


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Text to look for.")],
    compounds: Annotated[bool, typer.Option("--compounds", help="Search compounds instead.")] = False,
    seed_file: SeedFileOption = None,
) -> None:
    """Case-insensitive search over reactions (or compounds)."""
    store = _load_store(seed_file)
    if compounds:
        _echo([_dump(schemas.CompoundRead, c) for c in store.search_compounds(query)])
    else:
        _echo([_dump(schemas.ReactionRead, r) for r in store.search_reactions(query)])


@app.command()
def compound(
    compound_id: Annotated[int, typer.Argument(help="Compound id.")],
    seed_file: SeedFileOption = None,
) -> None:
    """Show a compound and the reactions it takes part in."""
    store = _load_store(seed_file)
    try:
        record = store.get_compound(compound_id)
    except NotFoundError as exc:
        _fail(str(exc))
    payload = _dump(schemas.CompoundRead, record)
    payload["reactions"] = _dump(schemas.CompoundReactionsRead, store.reactions_by_compound(compound_id))
    _echo(payload)


@app.command()
def compounds(
    reaction_id: Annotated[int, typer.Argument(help="Reaction id.")],
    seed_file: SeedFileOption = None,
) -> None:
    """List the reactants and products of a reaction."""
    store = _load_store(seed_file)
    try:
        store.get_reaction(reaction_id)
    except NotFoundError as exc:
        _fail(str(exc))
    _echo(_dump(schemas.ReactionCompoundsRead, store.compounds_by_reaction(reaction_id)))


@app.command()
def stats(seed_file: SeedFileOption = None) -> None:
    """Count reactions per functional group."""
    store = _load_store(seed_file)
    _echo(
        {
            "reactions": len(store),
            "compounds": len(store.compounds),
            "functionalGroups": store.functional_group_counts(),
        }
    )


def _tutor() -> AITutor:
    tutor = AITutor.from_settings(get_settings())
    if tutor is None:
        _fail("Set GEMINI_API_KEY to use the AI tutor.")
    return tutor


@app.command()
def ask(question: Annotated[str, typer.Argument(help="Question for the tutor.")]) -> None:
    """Ask the AI chemistry tutor a question."""
    tutor = _tutor()
    try:
        typer.echo(tutor.tutor_response(question))
    except TutorError as exc:
        _fail(str(exc))
    finally:
        tutor.close()


@app.command()
def explain(query: Annotated[str, typer.Argument(help="Reaction or concept to explain.")]) -> None:
    """Ask for a step-by-step explanation of a reaction."""
    tutor = _tutor()
    try:
        typer.echo(tutor.reaction_explanation(query))
    except TutorError as exc:
        _fail(str(exc))
    finally:
        tutor.close()


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Interface to bind.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port to listen on.")] = 8000,
) -> None:
    """Serve the HTTP API with uvicorn."""
    uvicorn.run("orgreact.api:build_app", host=host, port=port, factory=True)


if __name__ == "__main__":
    app()
