"""Skin Name Validation — URL vs account name vs custom label."""

import pytest

from skincache.core.skin_validation import player_key, skin_key, valid_account_name, valid_url


@pytest.mark.parametrize("candidate", [
    "http://textures.example.com/skin.png",
    "https://example.com/a.png",
    "HTTPS://EXAMPLE.COM/B.PNG",
])
def test_valid_url_accepts_http_urls(candidate):
    assert valid_url(candidate)


@pytest.mark.parametrize("candidate", ["steve", "ftp://x/y.png", "https://", "www.x.com/a.png"])
def test_valid_url_rejects_everything_else(candidate):
    assert not valid_url(candidate)


@pytest.mark.parametrize("candidate", ["Notch", "jeb_", "a-b", "x" * 16])
def test_valid_account_names(candidate):
    assert valid_account_name(candidate)


@pytest.mark.parametrize("candidate", ["", "x" * 17, "my skin", "café", "https://x.y/z"])
def test_invalid_account_names(candidate):
    assert not valid_account_name(candidate)


def test_keys_are_lowercased_and_stripped():
    assert skin_key("  Steve_Skin ") == "steve_skin"
    assert player_key(" Alice") == "alice"
