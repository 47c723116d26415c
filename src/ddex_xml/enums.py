# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""String support for schema enumerations.

Schema enumerations are integer enums whose member names repeat the enum
name in upper snake case, with a zero-valued ``*_UNSPECIFIED`` sentinel::

    class ReleaseType(XmlEnum):
        RELEASE_TYPE_UNSPECIFIED = 0
        RELEASE_TYPE_ALBUM = 1
        RELEASE_TYPE_SINGLE = 2

    ReleaseType.RELEASE_TYPE_ALBUM.xml_string()    # 'ALBUM'
    ReleaseType.parse_xml_string('single')          # (RELEASE_TYPE_SINGLE, True)
    ReleaseType.parse_xml_string('nope')            # (RELEASE_TYPE_UNSPECIFIED, False)
"""

from __future__ import annotations

import re
from enum import IntEnum
from functools import lru_cache
from types import ModuleType

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])')

SENTINEL_SUFFIX = '_UNSPECIFIED'


def upper_snake(name: str) -> str:
    """'ParentalWarningType' -> 'PARENTAL_WARNING_TYPE'."""
    return _CAMEL_BOUNDARY.sub('_', name).upper()


@lru_cache(maxsize=None)
def _wire_table(enum_cls: type[XmlEnum]) -> dict[XmlEnum, str]:
    """Member -> wire string, sentinel excluded."""
    marker = upper_snake(enum_cls.__name__) + '_'
    table = {}
    for member in enum_cls:
        if member.name.endswith(SENTINEL_SUFFIX):
            continue
        idx = member.name.rfind(marker)
        if idx < 0:
            continue
        wire = member.name[idx + len(marker):]
        if wire and wire != 'UNSPECIFIED':
            table[member] = wire
    return table


@lru_cache(maxsize=None)
def _parse_table(enum_cls: type[XmlEnum]) -> dict[str, XmlEnum]:
    return {wire.upper(): member for member, wire in _wire_table(enum_cls).items()}


class XmlEnum(IntEnum):
    """Integer enum with wire-string accessor and case-insensitive parser."""

    def xml_string(self) -> str:
        """Wire string of this member; '' for the sentinel."""
        return _wire_table(type(self)).get(self, '')

    @classmethod
    def parse_xml_string(cls, value: str) -> tuple[XmlEnum, bool]:
        """Parse a wire string (case-insensitive).

        Returns:
            (member, True) on match, (cls(0), False) otherwise.
        """
        member = _parse_table(cls).get(value.upper())
        if member is None:
            return cls(0), False
        return member, True

    @classmethod
    def wire_strings(cls) -> list[str]:
        """All wire strings in definition order."""
        return list(_wire_table(cls).values())


def find_enums(module: ModuleType) -> list[type[XmlEnum]]:
    """Enum types visible in a schema module."""
    found = []
    for value in vars(module).values():
        if isinstance(value, type) and issubclass(value, XmlEnum) and value is not XmlEnum:
            found.append(value)
    return found
