"""Unit tests for chirp body cleaning."""

from __future__ import annotations

import pytest

from chirpy.models import CHIRP_MAX_LENGTH, clean_chirp_body
from chirpy.services._shared.errors import ValidationFailure


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("I had something interesting for breakfast", "I had something interesting for breakfast"),
        ("I hear Mastodon is better than Chirpy. sharbert I need to migrate",
         "I hear Mastodon is better than Chirpy. **** I need to migrate"),
        ("I really need a kerfuffle to go to bed sooner, Fornax !",
         "I really need a **** to go to bed sooner, **** !"),
        ("KERFUFFLE", "****"),
    ],
)
def test_banned_words_are_masked_case_insensitively(raw, expected):
    assert clean_chirp_body(raw) == expected


def test_words_with_punctuation_are_kept():
    assert clean_chirp_body("Sharbert! kerfuffle.") == "Sharbert! kerfuffle."


def test_spacing_is_preserved():
    assert clean_chirp_body("a  fornax   b ") == "a  ****   b "


def test_length_limit_is_inclusive():
    assert clean_chirp_body("x" * CHIRP_MAX_LENGTH) == "x" * CHIRP_MAX_LENGTH

    with pytest.raises(ValidationFailure):
        clean_chirp_body("x" * (CHIRP_MAX_LENGTH + 1))


def test_empty_body_is_allowed():
    assert clean_chirp_body("") == ""
