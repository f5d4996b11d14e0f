# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import pytest

import common.parsing as parsing


def test_interpret_as_bool():
    assert parsing.interpret_as_bool("True")
    assert parsing.interpret_as_bool("true")
    assert parsing.interpret_as_bool("TrUe")
    assert parsing.interpret_as_bool("yes")
    assert parsing.interpret_as_bool("y")
    assert parsing.interpret_as_bool("1")
    assert parsing.interpret_as_bool(1)
    assert parsing.interpret_as_bool(True)
    assert not parsing.interpret_as_bool("False")
    assert not parsing.interpret_as_bool("Falee")
    assert not parsing.interpret_as_bool("Truee")
    assert not parsing.interpret_as_bool("no")
    assert not parsing.interpret_as_bool("n")
    assert not parsing.interpret_as_bool("0")
    assert not parsing.interpret_as_bool(0)
    assert not parsing.interpret_as_bool(False)


def test_normalize_address():
    mixed_case = "0xAbCdEf0123456789aBcDeF0123456789ABCDEF01"
    assert parsing.normalize_address(mixed_case) == mixed_case.lower()
    assert parsing.normalize_address(parsing.ZERO_ADDRESS) == parsing.ZERO_ADDRESS


@pytest.mark.parametrize(
    "address",
    [
        "",
        "0x",
        "abcdef0123456789abcdef0123456789abcdef01",  # missing prefix
        "0xabcdef0123456789abcdef0123456789abcdef0",  # too short
        "0xabcdef0123456789abcdef0123456789abcdef012",  # too long
        "0xghijkl0123456789abcdef0123456789abcdef01",
        None,
    ],
)
def test_normalize_address_rejects_malformed(address):
    with pytest.raises(ValueError):
        parsing.normalize_address(address)


def test_hash_from_hex():
    raw = bytes(range(32))
    assert parsing.hash_from_hex(raw.hex()) == raw
    assert parsing.hash_from_hex(f"0x{raw.hex()}") == raw
    assert parsing.hash_from_hex(raw.hex().upper()) == raw
    assert parsing.hash_to_hex(raw) == f"0x{raw.hex()}"


@pytest.mark.parametrize("hex_hash", ["", "0x", "00" * 31, "00" * 33, "zz" * 32, 42])
def test_hash_from_hex_rejects_malformed(hex_hash):
    with pytest.raises(ValueError):
        parsing.hash_from_hex(hex_hash)
