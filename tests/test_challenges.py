from __future__ import annotations

import pytest

from helix_trainer.challenges import (
    Category,
    Challenge,
    ChallengeCatalog,
    ChallengeNotFoundError,
    Difficulty,
)


def make_challenge(
    challenge_id: str = "replace-char",
    *,
    category: Category | str = Category.CHANGE,
    hints: tuple[str, ...] | list[str] = ("Use r",),
) -> Challenge:
    return Challenge(
        id=challenge_id,
        initial="hXllo world",
        target="hello world",
        optimal_keystrokes=3,
        hints=hints,  # type: ignore[arg-type]
        category=category,  # type: ignore[arg-type]
    )


def test_challenge_coerces_fields() -> None:
    challenge = make_challenge(category="surround", hints=["a", "b"])

    assert challenge.category is Category.SURROUND
    assert challenge.difficulty is Difficulty.EASY
    assert challenge.hints == ("a", "b")


def test_challenge_rejects_invalid_records() -> None:
    with pytest.raises(ValueError):
        make_challenge("")
    with pytest.raises(ValueError):
        Challenge(id="x", initial="", target="", optimal_keystrokes=-1)
    with pytest.raises(ValueError):
        make_challenge(category="painting")


def test_catalog_lookup() -> None:
    first = make_challenge("one")
    second = make_challenge("two", category=Category.MOVEMENT)
    catalog = ChallengeCatalog([first, second])

    assert len(catalog) == 2
    assert list(catalog) == [first, second]
    assert "one" in catalog
    assert catalog.get("two") is second
    assert catalog.find("missing") is None
    assert catalog.by_category("movement") == [second]


def test_catalog_missing_id_raises_key_error() -> None:
    catalog = ChallengeCatalog([make_challenge("one")])

    with pytest.raises(ChallengeNotFoundError) as excinfo:
        catalog.get("nope")

    assert isinstance(excinfo.value, KeyError)
    assert excinfo.value.challenge_id == "nope"


def test_catalog_rejects_duplicate_ids() -> None:
    with pytest.raises(ValueError):
        ChallengeCatalog([make_challenge("one"), make_challenge("one")])


def test_catalog_lists_every_category() -> None:
    assert ChallengeCatalog.categories() == (
        Category.MOVEMENT,
        Category.SELECTION,
        Category.CHANGE,
        Category.SURROUND,
        Category.MULTICURSOR,
    )
