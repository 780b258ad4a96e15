"""In-memory reaction store.

The store owns three collections built once from seed reactions:

- reactions, keyed by id in seed order;
- compounds, one per formula token (tokens are not deduplicated, so the same
  species in two reactions becomes two compounds);
- reaction/compound links tagged with a role.

Ids for each collection come from counters owned by the store. They start at
1, follow seed order and are never reused. After construction the only
mutation is :meth:`ReactionStore.toggle_bookmark`, which replaces a reaction
record with a copy whose bookmark flag is flipped.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections import Counter, defaultdict
from dataclasses import replace
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from orgreact.errors import CompoundNotFound, ReactionNotFound
from orgreact.formula import split_formula
from orgreact.models import (
    Compound,
    CompoundReactions,
    Reaction,
    ReactionCompound,
    ReactionCompounds,
    ReactionSeed,
    Role,
)
from orgreact.seed import load_seeds

logger = logging.getLogger(__name__)

_DESCRIPTIONS: Dict[Role, str] = {
    Role.REACTANT: "Compound involved in {name}",
    Role.PRODUCT: "Product of {name}",
}


class ReactionStore:
    """Reactions, compounds and their links, held in memory."""

    def __init__(self, seeds: Iterable[ReactionSeed]) -> None:
        self._reactions: Dict[int, Reaction] = {}
        self._compounds: Dict[int, Compound] = {}
        self._links: List[ReactionCompound] = []
        self._links_by_reaction: Dict[int, List[ReactionCompound]] = defaultdict(list)
        self._links_by_compound: Dict[int, List[ReactionCompound]] = defaultdict(list)
        self._reaction_ids = itertools.count(1)
        self._compound_ids = itertools.count(1)
        self._link_ids = itertools.count(1)
        self._bookmark_lock = threading.Lock()

        for seed in seeds:
            self._add_reaction(seed)

        logger.info(
            "Reaction store ready: %d reactions, %d compounds, %d links",
            len(self._reactions),
            len(self._compounds),
            len(self._links),
        )

    @classmethod
    def from_seed_file(cls, path: str | Path | None = None) -> "ReactionStore":
        """Build a store from a JSON seed file, or the bundled seeds by default."""
        return cls(load_seeds(path))

    def _add_reaction(self, seed: ReactionSeed) -> None:
        # Split before inserting anything so a bad formula leaves no partial rows.
        reactant_tokens, product_tokens = split_formula(seed.molecular_formula)

        reaction = Reaction.from_seed(next(self._reaction_ids), seed)
        self._reactions[reaction.id] = reaction

        for role, tokens in ((Role.REACTANT, reactant_tokens), (Role.PRODUCT, product_tokens)):
            for token in tokens:
                compound = Compound(
                    id=next(self._compound_ids),
                    name=token,
                    formula=token,
                    description=_DESCRIPTIONS[role].format(name=reaction.name),
                )
                self._compounds[compound.id] = compound
                self._add_link(
                    ReactionCompound(
                        id=next(self._link_ids),
                        reaction_id=reaction.id,
                        compound_id=compound.id,
                        role=role,
                    )
                )

    def _add_link(self, link: ReactionCompound) -> None:
        self._links.append(link)
        self._links_by_reaction[link.reaction_id].append(link)
        self._links_by_compound[link.compound_id].append(link)

    # Reactions

    def all_reactions(self) -> List[Reaction]:
        return list(self._reactions.values())

    def get_reaction(self, reaction_id: int) -> Reaction:
        try:
            return self._reactions[reaction_id]
        except KeyError:
            raise ReactionNotFound(reaction_id) from None

    def reactions_by_functional_group(self, group: str) -> List[Reaction]:
        wanted = group.lower()
        return self._filter_reactions(lambda r: r.functional_group.lower() == wanted)

    def reactions_by_chapter(self, chapter: int) -> List[Reaction]:
        return self._filter_reactions(lambda r: r.chapter == chapter)

    def search_reactions(self, query: str) -> List[Reaction]:
        """Case-insensitive substring match on name, category, functional group or mechanism."""
        needle = query.lower()
        return self._filter_reactions(
            lambda r: any(
                needle in text.lower()
                for text in (r.name, r.category, r.functional_group, r.mechanism)
            )
        )

    def toggle_bookmark(self, reaction_id: int) -> Reaction:
        with self._bookmark_lock:
            reaction = self.get_reaction(reaction_id)
            updated = replace(reaction, is_bookmarked=not reaction.is_bookmarked)
            self._reactions[reaction_id] = updated
        logger.debug("Reaction %d bookmarked=%s", reaction_id, updated.is_bookmarked)
        return updated

    def bookmarked_reactions(self) -> List[Reaction]:
        return self._filter_reactions(lambda r: r.is_bookmarked)

    def functional_group_counts(self) -> Dict[str, int]:
        """Number of reactions per functional group, in first-seen order."""
        return dict(Counter(r.functional_group for r in self._reactions.values()))

    def _filter_reactions(self, predicate: Callable[[Reaction], bool]) -> List[Reaction]:
        return [r for r in self._reactions.values() if predicate(r)]

    # Compounds

    @property
    def compounds(self) -> List[Compound]:
        return list(self._compounds.values())

    @property
    def links(self) -> Tuple[ReactionCompound, ...]:
        return tuple(self._links)

    def get_compound(self, compound_id: int) -> Compound:
        try:
            return self._compounds[compound_id]
        except KeyError:
            raise CompoundNotFound(compound_id) from None

    def compounds_by_reaction(self, reaction_id: int) -> ReactionCompounds:
        """Compounds linked to a reaction, split by role.

        Links whose compound cannot be resolved are left out of the result.
        An unknown reaction id yields empty lists.
        """
        links = self._links_by_reaction.get(reaction_id, [])
        return ReactionCompounds(
            reactants=self._resolve(links, Role.REACTANT, self._compounds, "compound_id"),
            products=self._resolve(links, Role.PRODUCT, self._compounds, "compound_id"),
        )

    def reactions_by_compound(self, compound_id: int) -> CompoundReactions:
        """Reactions linked to a compound, split by role, dropping unresolved links."""
        links = self._links_by_compound.get(compound_id, [])
        return CompoundReactions(
            as_reactant=self._resolve(links, Role.REACTANT, self._reactions, "reaction_id"),
            as_product=self._resolve(links, Role.PRODUCT, self._reactions, "reaction_id"),
        )

    def search_compounds(self, query: str) -> List[Compound]:
        needle = query.lower()
        return [
            c
            for c in self._compounds.values()
            if needle in c.name.lower() or needle in c.formula.lower()
        ]

    @staticmethod
    def _resolve(
        links: Sequence[ReactionCompound],
        role: Role,
        table: Dict[int, object],
        key: str,
    ) -> list:
        resolved = []
        for link in links:
            if link.role is not role:
                continue
            target_id = getattr(link, key)
            target = table.get(target_id)
            if target is None:
                logger.debug("Dropping link %d: %s %d is missing", link.id, key, target_id)
                continue
            resolved.append(target)
        return resolved

    def __len__(self) -> int:
        return len(self._reactions)
