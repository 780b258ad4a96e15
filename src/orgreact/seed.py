"""Seed reaction data bundled with OrgReact."""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, List, Sequence

from orgreact.errors import SeedError
from orgreact.models import ReactionSeed

BUNDLED_SEED = "reactions.json"


def parse_seeds(entries: Sequence[Any]) -> List[ReactionSeed]:
    """Turn decoded JSON entries into seeds, keeping their order."""
    seeds = []
    for index, entry in enumerate(entries):
        try:
            seeds.append(ReactionSeed.from_mapping(entry))
        except KeyError as exc:
            raise SeedError(f"Seed entry {index} is missing field {exc.args[0]!r}") from exc
        except (TypeError, ValueError) as exc:
            raise SeedError(f"Seed entry {index} is invalid: {exc}") from exc
    return seeds


def load_seeds(path: str | Path | None = None) -> List[ReactionSeed]:
    """Load seeds from a JSON file, or from the bundled data when no path is given."""
    if path is None:
        text = resources.files("orgreact.data").joinpath(BUNDLED_SEED).read_text(encoding="utf-8")
    else:
        text = Path(path).read_text(encoding="utf-8")

    entries = json.loads(text)
    if not isinstance(entries, list):
        raise SeedError("Seed file must contain a JSON list of reactions")
    return parse_seeds(entries)
