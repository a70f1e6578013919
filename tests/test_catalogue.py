"""Tests for Specimen and SpecimenCatalogue."""
import random
from collections import Counter

import pytest

from beast_blitz.catalogue import (
    Diet,
    Habitat,
    Locomotion,
    Size,
    Specimen,
    SpecimenCatalogue,
    default_catalogue,
)
from beast_blitz.types import EmptyCatalogueError


def _specimen(name, **kwargs):
    attrs = dict(
        diet=Diet.HERBIVORE,
        habitat=Habitat.FOREST,
        locomotion=Locomotion.WALKS,
        size=Size.SMALL,
    )
    attrs.update(kwargs)
    return Specimen(name, **attrs)


# --- Specimen ---

def test_equality_is_by_name():
    a = _specimen("Fox", diet=Diet.OMNIVORE)
    b = _specimen("Fox", diet=Diet.CARNIVORE, size=Size.LARGE)
    assert a == b
    assert hash(a) == hash(b)
    assert a != _specimen("Cat")
    assert len({a, b}) == 1


def test_specimen_is_immutable():
    s = _specimen("Fox")
    with pytest.raises(AttributeError):
        s.name = "Wolf"  # type: ignore[misc]


def test_empty_name_rejected():
    with pytest.raises(ValueError, match="non-empty"):
        _specimen("")


def test_asset_name_defaults_to_lowercase_name():
    assert _specimen("Polar Bear").asset_name == "polar bear"
    assert _specimen("Fox", asset_name="fox_v2").asset_name == "fox_v2"


def test_boolean_trait_defaults():
    s = _specimen("Fox")
    assert s.furred is True
    assert s.tailed is True
    assert s.striped is False
    assert s.spotted is False


# --- Registry ---

def test_define_get_has():
    cat = SpecimenCatalogue()
    fox = _specimen("Fox")
    cat.define(fox)
    assert cat.has("Fox")
    assert cat.get("Fox") is fox
    assert not cat.has("Wolf")
    with pytest.raises(KeyError):
        cat.get("Wolf")


def test_define_overwrites_same_name():
    cat = SpecimenCatalogue([_specimen("Fox", size=Size.SMALL)])
    cat.define(_specimen("Fox", size=Size.LARGE))
    assert len(cat) == 1
    assert cat.get("Fox").size is Size.LARGE


def test_random_specimen_on_empty_catalogue_raises():
    with pytest.raises(EmptyCatalogueError):
        SpecimenCatalogue().random_specimen(random.Random(0))


def test_random_specimen_samples_with_replacement():
    cat = SpecimenCatalogue([_specimen("A"), _specimen("B")])
    rng = random.Random(3)
    draws = Counter(cat.random_specimen(rng).name for _ in range(400))
    assert set(draws) == {"A", "B"}
    assert draws["A"] > 100 and draws["B"] > 100


def test_random_specimen_is_deterministic_for_seed():
    cat = default_catalogue()
    rng_a, rng_b = random.Random(9), random.Random(9)
    a = [cat.random_specimen(rng_a).name for _ in range(10)]
    b = [cat.random_specimen(rng_b).name for _ in range(10)]
    assert a == b


def test_specimens_matching():
    cat = default_catalogue()
    stripes = cat.specimens_matching(lambda s: s.striped)
    assert [s.name for s in stripes] == ["Tiger"]
    assert cat.specimens_matching(lambda s: False) == []


# --- Stock registry ---

def test_default_catalogue_contents():
    cat = default_catalogue()
    assert cat.names() == [
        "Bear", "Cat", "Cow", "Dog", "Elk", "Fox", "Giraffe", "Koala",
        "Lion", "Monkey", "Panda", "Polar Bear", "Rabbit", "Sloth", "Tiger",
    ]
    assert len(cat) == 15


def test_default_catalogue_attributes():
    cat = default_catalogue()
    koala = cat.get("Koala")
    assert koala.locomotion is Locomotion.CLIMBS
    assert koala.tailed is False
    assert cat.get("Polar Bear").habitat is Habitat.ARCTIC
    assert {s.name for s in cat.specimens_matching(lambda s: s.spotted)} == {"Cow", "Giraffe"}
    assert {s.name for s in cat.specimens_matching(lambda s: s.size is Size.MEDIUM)} == {"Dog", "Sloth"}
    assert all(s.furred for s in cat)
