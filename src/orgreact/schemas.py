"""Pydantic models for the HTTP API and CLI output.

Read models take attributes from the store dataclasses and dump with
camelCase keys, the wire format of the original seed data.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Read(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class ReactionRead(_Read):
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
    is_bookmarked: bool


class CompoundRead(_Read):
    id: int
    name: str
    formula: str
    description: str
    molecular_weight: str
    is_bookmarked: bool


class ReactionCompoundsRead(_Read):
    reactants: list[CompoundRead]
    products: list[CompoundRead]


class CompoundReactionsRead(_Read):
    as_reactant: list[ReactionRead]
    as_product: list[ReactionRead]


class TutorRequest(BaseModel):
    question: str


class ExplainRequest(BaseModel):
    query: str


class TutorReply(BaseModel):
    response: str
