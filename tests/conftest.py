# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from ddex_xml.registry import build_registry
from ddex_xml.sniffer import MessageSniffer

DATA_DIR = Path(__file__).parent / 'data'

ERN_432 = 'http://ddex.net/xml/ern/432'
XSI = 'http://www.w3.org/2001/XMLSchema-instance'


@pytest.fixture(scope='session')
def registry():
    """Registry of all compiled-in schema packages (read-only, shared)."""
    return build_registry()


@pytest.fixture
def sniffer(registry):
    return MessageSniffer(registry)


@pytest.fixture(scope='session')
def corpus_dir():
    return DATA_DIR


@pytest.fixture
def ern432_minimal():
    """Smallest ERN 4.3.2 document carrying an unmodeled xsi:schemaLocation."""
    return (
        f'<ern:NewReleaseMessage xmlns:ern="{ERN_432}" xmlns:xsi="{XSI}" '
        f'xsi:schemaLocation="{ERN_432} release.xsd">'
        '<MessageHeader><MessageId>M1</MessageId></MessageHeader>'
        '</ern:NewReleaseMessage>'
    ).encode()
