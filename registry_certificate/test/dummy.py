# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Addresses, hashes and time used throughout the registry tests"""

OWNER = "0x00000000000000000000000000000000000000a1"
ISSUER = "0x00000000000000000000000000000000000000b2"
OTHER_ISSUER = "0x00000000000000000000000000000000000000c3"
STRANGER = "0x00000000000000000000000000000000000000d4"

HASH_1 = "11" * 32
HASH_2 = "0x" + "22" * 32
"""Prefixed, to cover both notations"""
ZERO_HASH = "00" * 32

TEST_TIME = 1_700_000_000
