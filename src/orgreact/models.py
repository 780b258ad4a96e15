"""Data structures for reactions, compounds and their links."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Mapping

from pydantic.alias_generators import to_camel

FUNCTIONAL_GROUPS = (
    "Alkene",
    "Alkyne",
    "Benzene",
    "Alkyl Halide",
    "Grignard",
    "Reduction",
    "Phenol",
)

CATEGORIES = (
    "Hydrogenation",
    "Halogenation",
    "Hydrohalogenation",
    "Hydration",
    "Ozonolysis",
    "Polymerization",
    "Friedel-Crafts",
    "Grignard Reactions",
    "Reduction",
    "Oxidation",
    "Nitration",
    "Sulphonation",
)

MOLECULAR_WEIGHT_PLACEHOLDER = "Calculate based on formula"
DEFAULT_STOICHIOMETRY = "1"


class Role(str, Enum):
    REACTANT = "reactant"
    PRODUCT = "product"


@dataclass(frozen=True)
class ReactionSeed:
    """A reaction definition as it appears in seed data, before an id is assigned."""

    name: str
    category: str
    functional_group: str
    chapter: int
    reaction_number: int
    reagents: str
    conditions: str
    mechanism: str
    products: str
    real_world_applications: str
    molecular_formula: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ReactionSeed":
        """Build a seed from snake_case or camelCase keys.

        Raises KeyError naming the first missing field.
        """
        values: dict[str, Any] = {}
        for name in (f.name for f in fields(cls)):
            if name in data:
                values[name] = data[name]
            elif to_camel(name) in data:
                values[name] = data[to_camel(name)]
            else:
                raise KeyError(name)
        values["chapter"] = int(values["chapter"])
        values["reaction_number"] = int(values["reaction_number"])
        return cls(**values)


@dataclass(frozen=True)
class Reaction:
    id: int
    name: str
    category: str
    functional_group: str
    chapter: int
    reaction_number: int
    reagents: str
    conditions: str
    mechanism: str
    products: str
    real_world_applications: str
    molecular_formula: str
    is_bookmarked: bool = False

    @classmethod
    def from_seed(cls, reaction_id: int, seed: ReactionSeed) -> "Reaction":
        return cls(id=reaction_id, is_bookmarked=False, **asdict(seed))


@dataclass(frozen=True)
class Compound:
    id: int
    name: str
    formula: str
    description: str
    molecular_weight: str = MOLECULAR_WEIGHT_PLACEHOLDER
    is_bookmarked: bool = False


@dataclass(frozen=True)
class ReactionCompound:
    id: int
    reaction_id: int
    compound_id: int
    role: Role
    stoichiometry: str = DEFAULT_STOICHIOMETRY


@dataclass(frozen=True)
class ReactionCompounds:
    """Compounds of one reaction, split by role."""

    reactants: list[Compound] = field(default_factory=list)
    products: list[Compound] = field(default_factory=list)


@dataclass(frozen=True)
class CompoundReactions:
    """Reactions a compound takes part in, split by role."""

    as_reactant: list[Reaction] = field(default_factory=list)
    as_product: list[Reaction] = field(default_factory=list)
