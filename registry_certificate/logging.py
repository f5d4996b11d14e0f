# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""
Operations log of the certificate registry.

Each state changing operation writes exactly one entry, with status SUCCESS or ERROR.
The entries are plain log messages, the splunk formatter additionally
exposes their fields as top level keys.
"""

from enum import Enum

from common.logging import splunk


class RegistryOperationsLogEntry(splunk.SplunkExtendedLogEntry):

    class Status(Enum):
        success = "SUCCESS"
        error = "ERROR"

    class Operation(Enum):
        initialization = "INITIALIZATION"
        issuance = "ISSUANCE"
        revocation = "REVOCATION"
        issuer_management = "ISSUER_MANAGEMENT"

    class Step(Enum):
        """Naming format: <operation>_<step>"""

        initialization_owner = "OWNER"
        issuance_record = "RECORD"
        revocation_flag = "FLAG"
        issuer_management_add = "ADD"
        issuer_management_remove = "REMOVE"

    status: Status
    operation: Operation
    step: Step

    caller: str | None = None
    """Address of the principal which invoked the operation, as received"""
    cert_id: str | None = None
    address: str | None = None
    """Owner or issuer address concerned"""
    error_code: str | None = None
