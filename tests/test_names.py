"""Tests for profile name validation."""

import pytest

from confswap.errors import ValidationError
from confswap.names import MAX_NAME_LENGTH, validate_profile_name


@pytest.mark.parametrize(
    "name",
    [
        "",
        "   ",
        " work ",
        "work\n",
        ".work",
        "..",
        "a/b",
        "a\\b",
        "my profile",
        "<custom>",
        "work (modified)",
        "café",
        "work!",
        "x" * (MAX_NAME_LENGTH + 1),
    ],
)
def test_rejects(name):
    with pytest.raises(ValidationError):
        validate_profile_name(name)


@pytest.mark.parametrize(
    "name",
    ["work", "work-1", "Personal_2", "a", "0", "x" * MAX_NAME_LENGTH],
)
def test_accepts(name):
    validate_profile_name(name)


def test_message_explains_allowed_characters():
    with pytest.raises(ValidationError, match="A-Z a-z 0-9 _ -"):
        validate_profile_name("work!")
