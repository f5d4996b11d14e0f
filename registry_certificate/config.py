# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Configuration definition and collector of default values."""

import os
from typing import Annotated

from fastapi import Depends

import common.config as conf


class CertificateRegistryConfig(conf.Config):
    def __init__(self):
        super().__init__()
        self.app_name = os.getenv("APP_NAME", "Certificate Registry")

        self.owner_address = os.getenv("REGISTRY_OWNER_ADDRESS")
        '''
        Address becoming owner and first issuer when the registry is initialized.
        Only read on the very first start, the owner can not be changed afterwards.
        '''
        self.event_page_size = int(os.getenv("EVENT_PAGE_SIZE", "100"))
        '''Default and maximum amount of events returned by one /events request'''


inject = Annotated[CertificateRegistryConfig, Depends(CertificateRegistryConfig)]
