from __future__ import annotations

from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from recipe_api.slug import slugify


@pytest.mark.parametrize(
    "name,expected",
    (
        ("Tomato Soup", "tomato-soup"),
        ("  Mac & Cheese!! ", "mac-cheese"),
        ("Crème brûlée", "creme-brulee"),
        ("Grandma's 3-Bean Chili", "grandma-s-3-bean-chili"),
        ("already-a-slug", "already-a-slug"),
        ("Борщ", "борщ"),
        ("Домашний йогурт", "домашний-йогурт"),
        ("寿司", "寿司"),
        ("ごはん", "ごはん"),
        ("!!!", "recipe"),
        ("", "recipe"),
    ),
)
def test_slugify(name, expected):
    assert slugify(name) == expected


def test_slugify_is_deterministic():
    assert slugify("Chicken Pot Pie") == slugify("Chicken Pot Pie")


def test_names_that_normalize_alike_share_a_key():
    assert slugify("Tomato Soup") == slugify("tomato   SOUP!")


def test_names_without_letters_fall_back_to_a_usable_key():
    assert slugify("???") == slugify("!!!") == "recipe"
