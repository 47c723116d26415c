# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Compiled-in DDEX schema packages.

Each package module is named ``<family>.v<version>`` and defines the
message types of one schema version; the registry derives family and
version from the dotted module path.
"""

DEFAULT_PACKAGES: tuple[str, ...] = (
    'ddex_xml.schemas.ern.v383',
    'ddex_xml.schemas.ern.v43',
    'ddex_xml.schemas.ern.v432',
    'ddex_xml.schemas.mead.v11',
    'ddex_xml.schemas.pie.v10',
)
