# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Typed DDEX XML messages with namespace-faithful round trips.

Documents of the DDEX families (ERN, MEAD, PIE) are sniffed from their
document element, decoded into typed message dataclasses and encoded back
without losing namespace declarations or schema-location hints.

Main pieces:
    - **build_registry**: scan the schema packages once, get a read-only
      TypeRegistry to pass around
    - **detect / parse_any / parse_known**: classify and decode documents
    - **MessageSniffer**: the same operations bound to one registry
    - **RootMessage.decode / encode**: per-type codec
    - **validate_round_trip**: compare a document with its round trip

Example:
    >>> from ddex_xml import MessageSniffer, build_registry
    >>>
    >>> sniffer = MessageSniffer(build_registry())
    >>> sniffer.detect(xml_bytes)
    ('ern', '432', 'NewReleaseMessage')
    >>> message, family, version = sniffer.parse_any(xml_bytes)
    >>> message.encode()
"""

from ddex_xml.config import Settings
from ddex_xml.enums import XmlEnum
from ddex_xml.exceptions import (
    CodecError,
    DdexError,
    DecodeError,
    EncodeError,
    MalformedXML,
    NotRegistered,
    UnknownMessage,
    UnrecognizedDocument,
)
from ddex_xml.message import Message, RootMessage
from ddex_xml.namespaces import NamespaceInfo, resolve_namespace
from ddex_xml.oracle import DOMComparison, compare_documents, field_coverage, validate_round_trip
from ddex_xml.registry import TypeDescriptor, TypeRegistry, build_registry
from ddex_xml.sniffer import MessageSniffer, detect, parse_any, parse_known

__all__ = [
    "Settings",
    "XmlEnum",
    "DdexError",
    "MalformedXML",
    "UnrecognizedDocument",
    "NotRegistered",
    "UnknownMessage",
    "CodecError",
    "DecodeError",
    "EncodeError",
    "Message",
    "RootMessage",
    "NamespaceInfo",
    "resolve_namespace",
    "DOMComparison",
    "compare_documents",
    "field_coverage",
    "validate_round_trip",
    "TypeDescriptor",
    "TypeRegistry",
    "build_registry",
    "MessageSniffer",
    "detect",
    "parse_any",
    "parse_known",
]
