# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by ddex_xml.

All errors derive from DdexError so batch callers can catch one type,
skip the offending document and continue.
"""

from __future__ import annotations


class DdexError(Exception):
    """Base class for every ddex_xml error.

    Attributes:
        stage: Pipeline stage that failed ('detect', 'lookup', 'decode',
            'encode'), set by the dispatcher; None when raised directly.
    """

    stage: str | None = None


class MalformedXML(DdexError, ValueError):
    """The byte stream is not well-formed XML."""

    def __init__(self, diagnostic: str):
        self.diagnostic = diagnostic
        super().__init__(f"Malformed XML: {diagnostic}")


class UnrecognizedDocument(DdexError):
    """Root element and namespace match no registered message type."""

    def __init__(self, root_element: str, namespace: str):
        self.root_element = root_element
        self.namespace = namespace
        super().__init__(
            f"Unknown DDEX message type with root element '{root_element}' "
            f"and namespace '{namespace}'"
        )


class NotRegistered(DdexError, LookupError):
    """No message type is registered for a family/version pair."""

    def __init__(self, family: str, version: str):
        self.family = family
        self.version = version
        super().__init__(f"Unknown message type: {family}/{version}")


class UnknownMessage(DdexError, LookupError):
    """No message type is registered for a family/version/root triple."""

    def __init__(self, family: str, version: str, root_element: str):
        self.family = family
        self.version = version
        self.root_element = root_element
        super().__init__(f"Unknown message: {family}/{version}/{root_element}")


class CodecError(DdexError):
    """Structural failure of the typed-field binding.

    Attributes:
        message_name: Name of the root message type being processed.
        stage: 'decode' or 'encode'.
        path: Element path where the failure happened.
    """

    def __init__(self, message_name: str, reason: str, path: str = ''):
        self.message_name = message_name
        self.reason = reason
        self.path = path
        where = f" at {path}" if path else ''
        super().__init__(f"{self.stage} {message_name}{where}: {reason}")


class DecodeError(CodecError):
    stage = 'decode'


class EncodeError(CodecError):
    stage = 'encode'
