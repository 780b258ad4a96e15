"""Reaction browsing helpers for the GUI layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from orgreact.formula import split_formula
from orgreact.models import Compound, Reaction
from orgreact.store import ReactionStore

ALL_GROUPS = "All Groups"
AS_REACTANT = "As Reactant"
AS_PRODUCT = "As Product"

TUTOR_GREETING = (
    "Hi! I'm your AI Chemistry Tutor. I can help you understand chemical reactions, "
    "concepts, or we can just chat about chemistry! What would you like to know?"
)


@dataclass(frozen=True)
class BrowserFilter:
    query: str = ""
    group: Optional[str] = None
    bookmarked_only: bool = False


def filter_reactions(store: ReactionStore, criteria: BrowserFilter) -> List[Reaction]:
    """Reactions matching the search text, functional group and bookmark filter together."""
    reactions = store.search_reactions(criteria.query)
    if criteria.group and criteria.group != ALL_GROUPS:
        wanted = {r.id for r in store.reactions_by_functional_group(criteria.group)}
        reactions = [r for r in reactions if r.id in wanted]
    if criteria.bookmarked_only:
        reactions = [r for r in reactions if r.is_bookmarked]
    return reactions


def list_label(reaction: Reaction) -> str:
    marker = "★ " if reaction.is_bookmarked else ""
    return f"{marker}{reaction.chapter}.{reaction.reaction_number} {reaction.name}"


def format_reaction_detail(reaction: Reaction) -> str:
    """Plain-text card for the detail pane."""
    reactants, products = split_formula(reaction.molecular_formula)
    lines = [
        reaction.name,
        f"{reaction.category} | {reaction.functional_group} | Chapter {reaction.chapter}",
        "",
        f"Reactants: {', '.join(reactants)}",
        f"Products:  {', '.join(products)}",
        f"Formula:   {reaction.molecular_formula}",
        "",
        f"Reagents:   {reaction.reagents}",
        f"Conditions: {reaction.conditions}",
        f"Mechanism:  {reaction.mechanism}",
        f"Yields:     {reaction.products}",
        "",
        f"Applications: {reaction.real_world_applications}",
    ]
    return "\n".join(lines)


def compound_label(compound: Compound) -> str:
    return f"{compound.formula} (#{compound.id})"


def reaction_compound_labels(store: ReactionStore, reaction_id: int) -> List[Tuple[str, int]]:
    """(label, compound id) pairs for a reaction, reactants first."""
    bundle = store.compounds_by_reaction(reaction_id)
    return [(f"Reactant: {compound_label(c)}", c.id) for c in bundle.reactants] + [
        (f"Product: {compound_label(c)}", c.id) for c in bundle.products
    ]


def format_compound_detail(compound: Compound) -> str:
    return "\n".join(
        [
            compound.name,
            "",
            f"Formula:          {compound.formula}",
            f"Molecular Weight: {compound.molecular_weight}",
            f"Description:      {compound.description}",
        ]
    )


def related_reactions(store: ReactionStore, compound_id: int) -> Dict[str, List[Reaction]]:
    """Reactions a compound appears in, keyed by the tab they are shown under."""
    related = store.reactions_by_compound(compound_id)
    return {AS_REACTANT: related.as_reactant, AS_PRODUCT: related.as_product}


def chat_markdown(messages: List[Tuple[str, str]]) -> str:
    """Render (role, text) chat turns as one markdown document."""
    blocks = []
    for role, text in messages:
        speaker = "**You**" if role == "user" else "**Tutor**"
        blocks.append(f"{speaker}\n\n{text}")
    return "\n\n---\n\n".join(blocks)
