# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import re

_ADDRESS_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")
_HASH_PATTERN = re.compile(r"(0x)?[0-9a-fA-F]{64}")

ZERO_ADDRESS = "0x" + "00" * 20
"""The null address, never a valid principal."""


def normalize_address(address: str) -> str:
    """
    Normalizes an account address (0x followed by 40 hex digits) to lower case.
    Throws ValueError if the address is malformed.
    """
    if not isinstance(address, str) or not _ADDRESS_PATTERN.fullmatch(address):
        raise ValueError(f"Malformed address: {address!r}")
    return address.lower()


def hash_from_hex(hex_hash: str) -> bytes:
    """
    Decode a 32 byte content hash given as 64 hex digits, optionally 0x prefixed.
    Throws ValueError if the hash is malformed.
    """
    if not isinstance(hex_hash, str) or not _HASH_PATTERN.fullmatch(hex_hash):
        raise ValueError("Hash must be 32 bytes as 64 hex digits")
    return bytes.fromhex(hex_hash.removeprefix("0x"))


def hash_to_hex(raw_hash: bytes) -> str:
    """Encode a content hash as 0x prefixed lower case hex"""
    return f"0x{raw_hash.hex()}"


def interpret_as_bool(boolify: str) -> bool:
    """
    Converts an inpput to an boolean according to commonly used patterns.
    """
    if isinstance(boolify, bool):
        return boolify
    if isinstance(boolify, int):
        return boolify > 0
    elif isinstance(boolify, str):
        return re.match(r"^(y|yes|1|true)$", boolify, re.IGNORECASE | re.MULTILINE) is not None
    raise Exception(f"Can't boolify a {boolify}.")
