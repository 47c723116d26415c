# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Namespace naming conventions of the DDEX schema families.

The namespace of a (family, version) pair is a pure function of naming
conventions::

    >>> info = resolve_namespace('ern', '4.3.2')
    >>> info.namespace
    'http://ddex.net/xml/ern/432'
    >>> info.prefix
    'ern'
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from .config import Settings

NAMESPACE_XMLNS = 'http://www.w3.org/2000/xmlns/'
NAMESPACE_XML = 'http://www.w3.org/XML/1998/namespace'
NAMESPACE_XSI = 'http://www.w3.org/2001/XMLSchema-instance'
NAMESPACE_AVS = 'http://ddex.net/xml/avs/avs'

# family -> (base namespace URI, main schema file)
FAMILIES: dict[str, tuple[str, str]] = {
    'ern': ('http://ddex.net/xml/ern/', 'release-notification.xsd'),
    'mead': ('http://ddex.net/xml/mead/', 'media-enrichment-and-description.xsd'),
    'pie': ('http://ddex.net/xml/pie/', 'party-identification-and-enrichment.xsd'),
}

_AVS_MARKERS = (
    f'xmlns:avs="{NAMESPACE_AVS}"',
    f'namespace="{NAMESPACE_AVS}"',
)


@dataclass(frozen=True)
class NamespaceInfo:
    """Namespace configuration of one schema family/version."""

    namespace: str
    prefix: str
    schema_file: str
    imports_avs: bool = False


def normalize_version(version: str) -> str:
    """Strip a leading 'v' and version separators: 'v4.3.2' -> '432'."""
    version = version.strip()
    if version[:1] in ('v', 'V'):
        version = version[1:]
    return version.replace('.', '').replace('_', '')


@lru_cache(maxsize=None)
def resolve_namespace(
    family: str,
    version: str,
    xsd_dir: str | Path | None = None,
) -> NamespaceInfo | None:
    """Return the NamespaceInfo of a family/version, None for unknown families."""
    known = FAMILIES.get(family)
    if known is None:
        return None
    base_uri, schema_file = known
    version_number = normalize_version(version)
    if xsd_dir is None:
        xsd_dir = Settings.from_env().xsd_dir
    schema_path = Path(xsd_dir) / f'{family}v{version_number}' / schema_file
    return NamespaceInfo(
        namespace=f'{base_uri}{version_number}',
        prefix=family,
        schema_file=schema_file,
        imports_avs=imports_avs(schema_path),
    )


def imports_avs(schema_path: str | Path) -> bool:
    """True if the schema file declares or imports the AVS namespace.

    A missing or unreadable file counts as no import.
    """
    try:
        content = Path(schema_path).read_text(encoding='utf-8', errors='replace')
    except OSError:
        return False
    return any(marker in content for marker in _AVS_MARKERS)
