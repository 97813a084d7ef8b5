import pytest

from ravehub.slugs import generate_slug, generate_unique_slug, is_valid_slug


@pytest.mark.parametrize("text, expected", [
    ("Ultra Perú 2025!", "ultra-peru-2025"),
    ("  Año Nuevo -- en   Cancún  ", "ano-nuevo-en-cancun"),
    ("Ñandú & Çedilla", "nandu-cedilla"),
    ("---", ""),
    ("", ""),
    (None, ""),
    (2025, ""),
])
def test_generate_slug(text, expected):
    assert generate_slug(text) == expected


@pytest.mark.parametrize("slug, valid", [
    ("ultra-peru-2025", True),
    ("ultra", True),
    ("Ultra", False),
    ("ultra--peru", False),
    ("-ultra", False),
    ("ultra-", False),
    ("ultra_peru", False),
    ("", False),
    ("ultra\n", False),
])
def test_is_valid_slug(slug, valid):
    assert is_valid_slug(slug) is valid


def test_generate_unique_slug():
    assert generate_unique_slug("Ultra Perú") == "ultra-peru"
    assert generate_unique_slug("Ultra Perú", ["ultra-peru"]) == "ultra-peru-1"
    assert generate_unique_slug("Ultra Perú", ["ultra-peru", "ultra-peru-1", "ultra-peru-2"]) == "ultra-peru-3"
