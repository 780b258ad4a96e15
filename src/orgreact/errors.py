"""Exception hierarchy for OrgReact."""

from __future__ import annotations


class OrgReactError(Exception):
    """Base class for all OrgReact errors."""


class NotFoundError(OrgReactError, LookupError):
    kind = "Entity"

    def __init__(self, entity_id: int) -> None:
        self.entity_id = entity_id
        super().__init__(f"{self.kind} not found: {entity_id}")


class ReactionNotFound(NotFoundError):
    kind = "Reaction"


class CompoundNotFound(NotFoundError):
    kind = "Compound"


class FormulaError(OrgReactError, ValueError):
    """A molecular formula without exactly one '->' separator."""


class SeedError(OrgReactError, ValueError):
    """Seed data that cannot be turned into reactions."""


class TutorError(OrgReactError, RuntimeError):
    """The text generation backend failed to answer."""
