"""OrgReact core package."""

__version__ = "0.1.0"

from orgreact.errors import CompoundNotFound, NotFoundError, ReactionNotFound
from orgreact.models import Compound, Reaction, ReactionCompound, ReactionSeed, Role
from orgreact.store import ReactionStore

__all__ = [
    "CompoundNotFound",
    "NotFoundError",
    "ReactionNotFound",
    "Compound",
    "Reaction",
    "ReactionCompound",
    "ReactionSeed",
    "Role",
    "ReactionStore",
]
