"""Riddle generation: pick a predicate that splits the current grid sensibly.

Each pool is a list of ``RiddleTemplate`` (phrase + predicate). A pass over
a pool shuffles it and takes the first template whose match count ``m``
satisfies ``1 <= m < len(grid)`` and ``m <= max_selections``. The advanced
pool falls back to the elementary pool (keeping the advanced tag); if no
template fits at all, the riddle names one grid specimen outright.
"""
from __future__ import annotations

import logging
import random as _random_mod
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Sequence

from beast_blitz.catalogue import Diet, Habitat, Locomotion, Predicate, Size, Specimen

if TYPE_CHECKING:
    from beast_blitz.config import DifficultyTier

logger = logging.getLogger(__name__)

ELEMENTARY_POOL = "elementary"
ADVANCED_POOL = "advanced"


class RiddleComplexity(IntEnum):
    ELEMENTARY = 1
    INTERMEDIATE = 2
    ADVANCED = 3


@dataclass(frozen=True)
class RiddleTemplate:
    phrase: str
    predicate: Predicate


@dataclass(frozen=True)
class Riddle:
    """A question plus the grid cells that answer it.

    ``answers`` holds the matching grid cells in grid order, duplicates
    included.
    """

    question: str
    answers: tuple[Specimen, ...]
    complexity: RiddleComplexity

    @property
    def answer_names(self) -> frozenset[str]:
        return frozenset(s.name for s in self.answers)


ELEMENTARY_TEMPLATES: list[RiddleTemplate] = [
    RiddleTemplate("Find herbivores (plant eaters)", lambda s: s.diet is Diet.HERBIVORE),
    RiddleTemplate("Find carnivores (meat eaters)", lambda s: s.diet is Diet.CARNIVORE),
    RiddleTemplate("Find omnivores (eat both)", lambda s: s.diet is Diet.OMNIVORE),
    RiddleTemplate("Find forest animals", lambda s: s.habitat is Habitat.FOREST),
    RiddleTemplate("Find savannah animals", lambda s: s.habitat is Habitat.SAVANNAH),
    RiddleTemplate("Find domestic animals", lambda s: s.habitat is Habitat.DOMESTIC),
    RiddleTemplate("Find large animals", lambda s: s.size is Size.LARGE),
    RiddleTemplate("Find small animals", lambda s: s.size is Size.SMALL),
    RiddleTemplate("Find fast animals", lambda s: s.locomotion is Locomotion.FAST),
    RiddleTemplate("Find slow animals", lambda s: s.locomotion is Locomotion.SLOW),
    RiddleTemplate("Find climbing animals", lambda s: s.locomotion is Locomotion.CLIMBS),
    RiddleTemplate("Find spotted animals", lambda s: s.spotted),
    RiddleTemplate("Find striped animals", lambda s: s.striped),
    RiddleTemplate("Find animals with tails", lambda s: s.tailed),
    RiddleTemplate("Find furry animals", lambda s: s.furred),
]

ADVANCED_TEMPLATES: list[RiddleTemplate] = [
    RiddleTemplate(
        "Find large herbivores",
        lambda s: s.size is Size.LARGE and s.diet is Diet.HERBIVORE,
    ),
    RiddleTemplate(
        "Find small carnivores",
        lambda s: s.size is Size.SMALL and s.diet is Diet.CARNIVORE,
    ),
    RiddleTemplate(
        "Find fast forest animals",
        lambda s: s.locomotion is Locomotion.FAST and s.habitat is Habitat.FOREST,
    ),
    RiddleTemplate(
        "Find slow or climbing animals",
        lambda s: s.locomotion in (Locomotion.SLOW, Locomotion.CLIMBS),
    ),
    RiddleTemplate(
        "Find domestic omnivores",
        lambda s: s.habitat is Habitat.DOMESTIC and s.diet is Diet.OMNIVORE,
    ),
    RiddleTemplate(
        "Find wild predators",
        lambda s: s.diet is Diet.CARNIVORE and s.habitat is not Habitat.DOMESTIC,
    ),
    RiddleTemplate("Find medium-sized animals", lambda s: s.size is Size.MEDIUM),
    RiddleTemplate("Find arctic animals", lambda s: s.habitat is Habitat.ARCTIC),
    RiddleTemplate(
        "Find savannah predators",
        lambda s: s.habitat is Habitat.SAVANNAH and s.diet is Diet.CARNIVORE,
    ),
    RiddleTemplate("Find animals that climb trees", lambda s: s.locomotion is Locomotion.CLIMBS),
    RiddleTemplate(
        "Find large wild animals",
        lambda s: s.size is Size.LARGE and s.habitat is not Habitat.DOMESTIC,
    ),
    RiddleTemplate(
        "Find small domestic animals",
        lambda s: s.size is Size.SMALL and s.habitat is Habitat.DOMESTIC,
    ),
    RiddleTemplate(
        "Find forest herbivores",
        lambda s: s.habitat is Habitat.FOREST and s.diet is Diet.HERBIVORE,
    ),
    RiddleTemplate(
        "Find fast carnivores",
        lambda s: s.locomotion is Locomotion.FAST and s.diet is Diet.CARNIVORE,
    ),
]


class RiddleGenerator:
    """Produces riddles for a grid from named template pools."""

    def __init__(
        self,
        rng: _random_mod.Random,
        pools: dict[str, Sequence[RiddleTemplate]] | None = None,
    ) -> None:
        self._rng = rng
        self._pools: dict[str, list[RiddleTemplate]] = {
            ELEMENTARY_POOL: list(ELEMENTARY_TEMPLATES),
            ADVANCED_POOL: list(ADVANCED_TEMPLATES),
        }
        if pools is not None:
            for name, templates in pools.items():
                self._pools[name] = list(templates)

    def pool(self, name: str) -> list[RiddleTemplate]:
        """Look up a template pool. Raises KeyError if not defined."""
        return list(self._pools[name])

    def synthesize(
        self,
        pool: str,
        grid: Sequence[Specimen],
        max_selections: int,
        complexity: RiddleComplexity,
    ) -> Riddle | None:
        """First-fit pass over a shuffled pool. None if no template fits."""
        templates = list(self._pools[pool])
        self._rng.shuffle(templates)
        size = len(grid)
        for template in templates:
            matches = tuple(s for s in grid if template.predicate(s))
            if 1 <= len(matches) < size and len(matches) <= max_selections:
                return Riddle(template.phrase, matches, complexity)
        return None

    def generate(self, tier: DifficultyTier, grid: Sequence[Specimen]) -> Riddle:
        if not grid:
            raise ValueError("cannot build a riddle for an empty grid")
        cfg = tier.config
        if cfg.riddle_pool == ADVANCED_POOL:
            complexity = RiddleComplexity.ADVANCED
        else:
            complexity = RiddleComplexity.ELEMENTARY

        riddle = self.synthesize(cfg.riddle_pool, grid, cfg.max_selections, complexity)
        if riddle is None and cfg.riddle_pool != ELEMENTARY_POOL:
            logger.debug("no %s template fits; using elementary pool", cfg.riddle_pool)
            riddle = self.synthesize(ELEMENTARY_POOL, grid, cfg.max_selections, complexity)
        if riddle is None:
            riddle = self._name_riddle(grid, complexity)
        return riddle

    def _name_riddle(
        self, grid: Sequence[Specimen], complexity: RiddleComplexity
    ) -> Riddle:
        chosen = self._rng.choice(list(grid))
        logger.debug("no template fits; asking for %s by name", chosen.name)
        matches = tuple(s for s in grid if s == chosen)
        return Riddle(f"Find the {chosen.name}", matches, complexity)
