"""Tests for address validation, platform detection and origin mapping."""

import pytest

from web3_feed.core.identity import (
    detect_search_platform,
    is_ens_name,
    is_valid_ethereum_address,
    is_valid_solana_address,
    is_valid_url,
    resolve_fetch_origin,
)


@pytest.mark.parametrize(
    "address",
    [
        "0xf1268b5eae72617ddb2cfcaa82d379155b675dfd",
        "0x742b97dc68bcc3475feb734c2df2c76f25664532",
        "0xd8da6bf26964af9d7eed9e03e53415d37aa96045",
    ],
)
def test_valid_ethereum_addresses(address):
    assert is_valid_ethereum_address(address)


@pytest.mark.parametrize(
    "address",
    [
        "0x0000000000000000000000000000000000000000",
        "0x0000000000000000000000000000000000000001",
        "0x000000000000000000000000000000000000dead",
        "0x1111111111111111111111111111111111111111",
        "0xabef123468abef123468abef123468abef123468",
        "0xf1268b5eae72617ddb2cfcaa82d379155b675df",
        "f1268b5eae72617ddb2cfcaa82d379155b675dfd00",
        "0xzz268b5eae72617ddb2cfcaa82d379155b675dfd",
        "",
        None,
    ],
)
def test_invalid_ethereum_addresses(address):
    assert not is_valid_ethereum_address(address)


def test_solana_address():
    assert is_valid_solana_address("7EcDhSYGxXyscszYEp35KHN8vvw3svAuLKTzXwCFLtV")
    assert not is_valid_solana_address("0OIl" * 10)
    assert not is_valid_solana_address("short")
    assert not is_valid_solana_address("")


@pytest.mark.parametrize(
    "term, platform",
    [
        ("vitalik.eth", "ens"),
        ("0xd8da6bf26964af9d7eed9e03e53415d37aa96045", "ethereum"),
        ("stani.lens", "lens"),
        ("brad.crypto", "unstoppableDomains"),
        ("name.bnb", "space_id"),
        ("song.csb", "crossbell"),
        ("phone.bit", "dotbit"),
        ("bonfida.sol", "sns"),
        ("7EcDhSYGxXyscszYEp35KHN8vvw3svAuLKTzXwCFLtV", "solana"),
        ("jack", "twitter"),
        ("a-very-long-farcaster-name", "farcaster"),
        ("", "next.id"),
        ("not a handle!", "next.id"),
    ],
)
def test_detect_search_platform(term, platform):
    assert detect_search_platform(term) == platform


@pytest.mark.parametrize(
    "query, origin",
    [
        ("vitalik.eth", "vitalik.eth.limo"),
        ("gallery.art", "gallery.art.limo"),
        ("phone.bit", "phone.bit.cc"),
        ("bonfida.sol", "bonfida.sol.build"),
        ("example.com", "https://example.com"),
        ("https://example.com/blog", "https://example.com/blog"),
        ("nodomain", "nodomain"),
    ],
)
def test_resolve_fetch_origin(query, origin):
    assert resolve_fetch_origin(query) == origin


def test_url_and_ens_helpers():
    assert is_valid_url("https://example.com")
    assert not is_valid_url("https//broken")
    assert is_ens_name("vitalik.eth")
    assert not is_ens_name("example.com")
