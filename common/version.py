# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Build information, set as environment variables by the container build"""

import os


def get_version() -> str:
    version = os.getenv("VERSION", "no version")
    commit_hash = os.getenv("COMMIT_HASH", "no hash")
    commit_time = os.getenv("COMMIT_TIMESTAMP", "no timestamp")
    return f"{version} ({commit_hash} {commit_time})"
