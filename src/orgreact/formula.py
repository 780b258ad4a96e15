"""Splitting of textual reaction formulas into species tokens."""

from __future__ import annotations

from typing import List, Tuple

from orgreact.errors import FormulaError

ARROW = "->"
PLUS = "+"


def split_side(side: str) -> List[str]:
    """Split one side of a formula on '+' and trim every token."""
    return [token.strip() for token in side.split(PLUS)]


def split_formula(formula: str) -> Tuple[List[str], List[str]]:
    """Return the (reactants, products) tokens of ``"A + B -> C"``.

    Tokens are opaque strings; nothing checks that they are real species.
    """
    sides = formula.split(ARROW)
    if len(sides) != 2:
        raise FormulaError(
            f"Formula must contain exactly one '{ARROW}': {formula!r}"
        )
    reactants, products = sides
    return split_side(reactants), split_side(products)
