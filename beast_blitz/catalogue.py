"""Specimen model and the read-only registry the grid is sampled from."""
from __future__ import annotations

import random as _random_mod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator

from beast_blitz.types import EmptyCatalogueError


class Diet(str, Enum):
    HERBIVORE = "herbivore"
    CARNIVORE = "carnivore"
    OMNIVORE = "omnivore"


class Habitat(str, Enum):
    FOREST = "forest"
    SAVANNAH = "savannah"
    ARCTIC = "arctic"
    DOMESTIC = "domestic"
    MOUNTAIN = "mountain"


class Locomotion(str, Enum):
    WALKS = "walks"
    CLIMBS = "climbs"
    SLOW = "slow"
    FAST = "fast"


class Size(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


@dataclass(frozen=True, eq=False)
class Specimen:
    """Immutable animal definition. Two specimens are equal iff their names are.

    Attributes:
        name: Unique identifier, also the display label.
        diet, habitat, locomotion, size: Categorical attributes.
        furred, striped, spotted, tailed: Boolean traits.
        asset_name: Image key used by the presentation layer.
    """

    name: str
    diet: Diet
    habitat: Habitat
    locomotion: Locomotion
    size: Size
    furred: bool = True
    striped: bool = False
    spotted: bool = False
    tailed: bool = True
    asset_name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Specimen name must be non-empty")
        if not self.asset_name:
            object.__setattr__(self, "asset_name", self.name.lower())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Specimen):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)


Predicate = Callable[[Specimen], bool]


class SpecimenCatalogue:
    """Registry of specimen definitions, keyed by name in definition order."""

    def __init__(self, specimens: list[Specimen] | None = None) -> None:
        self._definitions: dict[str, Specimen] = {}
        for specimen in specimens or ():
            self.define(specimen)

    def define(self, specimen: Specimen) -> None:
        """Register a specimen. Overwrites if the name exists."""
        self._definitions[specimen.name] = specimen

    def get(self, name: str) -> Specimen:
        """Look up a specimen. Raises KeyError if not defined."""
        if name not in self._definitions:
            raise KeyError(name)
        return self._definitions[name]

    def has(self, name: str) -> bool:
        return name in self._definitions

    def names(self) -> list[str]:
        return list(self._definitions)

    def specimens(self) -> list[Specimen]:
        return list(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[Specimen]:
        return iter(self.specimens())

    def random_specimen(self, rng: _random_mod.Random) -> Specimen:
        """Uniform draw with replacement."""
        if not self._definitions:
            raise EmptyCatalogueError("catalogue has no specimens")
        return rng.choice(self.specimens())

    def specimens_matching(self, predicate: Predicate) -> list[Specimen]:
        return [s for s in self._definitions.values() if predicate(s)]


def default_catalogue() -> SpecimenCatalogue:
    """Build the stock registry of animals."""
    H, C, O = Diet.HERBIVORE, Diet.CARNIVORE, Diet.OMNIVORE
    return SpecimenCatalogue([
        Specimen("Bear", O, Habitat.FOREST, Locomotion.WALKS, Size.LARGE),
        Specimen("Cat", C, Habitat.DOMESTIC, Locomotion.FAST, Size.SMALL),
        Specimen("Cow", H, Habitat.DOMESTIC, Locomotion.WALKS, Size.LARGE, spotted=True),
        Specimen("Dog", O, Habitat.DOMESTIC, Locomotion.FAST, Size.MEDIUM),
        Specimen("Elk", H, Habitat.FOREST, Locomotion.FAST, Size.LARGE),
        Specimen("Fox", O, Habitat.FOREST, Locomotion.FAST, Size.SMALL),
        Specimen("Giraffe", H, Habitat.SAVANNAH, Locomotion.WALKS, Size.LARGE, spotted=True),
        Specimen("Koala", H, Habitat.FOREST, Locomotion.CLIMBS, Size.SMALL, tailed=False),
        Specimen("Lion", C, Habitat.SAVANNAH, Locomotion.FAST, Size.LARGE),
        Specimen("Monkey", O, Habitat.FOREST, Locomotion.CLIMBS, Size.SMALL),
        Specimen("Panda", H, Habitat.FOREST, Locomotion.SLOW, Size.LARGE),
        Specimen("Polar Bear", C, Habitat.ARCTIC, Locomotion.WALKS, Size.LARGE),
        Specimen("Rabbit", H, Habitat.DOMESTIC, Locomotion.FAST, Size.SMALL),
        Specimen("Sloth", H, Habitat.FOREST, Locomotion.SLOW, Size.MEDIUM),
        Specimen("Tiger", C, Habitat.FOREST, Locomotion.FAST, Size.LARGE, striped=True),
    ])
