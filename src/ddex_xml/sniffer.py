# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Message sniffing and dispatch.

detect() reads a document only up to its first start element and
classifies it by local name and namespace; parse_any() then builds the
matching message type and decodes the document into it.

Example:
    >>> registry = build_registry()
    >>> detect(xml_bytes, registry)
    ('ern', '432', 'NewReleaseMessage')
    >>> message, family, version = parse_any(xml_bytes, registry)
"""

from __future__ import annotations

import logging
from typing import Any
from xml import sax

from .exceptions import DdexError, MalformedXML, UnrecognizedDocument
from .message import RootMessage
from .registry import TypeRegistry
from .xml_tree import XmlTreeParser, is_namespace_declaration, split_qname

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096


class _RootFound(Exception):
    """Stops the SAX feed once the document element is seen."""


class RootElementSniffer(sax.handler.ContentHandler):
    """SAX handler recording the first start element and nothing else."""

    def __init__(self) -> None:
        super().__init__()
        self.tag: str | None = None
        self.attrs: dict[str, str] = {}

    @classmethod
    def sniff(cls, source: str | bytes, chunk_size: int = CHUNK_SIZE) -> tuple[str, dict[str, str]]:
        """Qualified name and attributes of the document element.

        The source is fed incrementally and parsing stops at the first
        start element.

        Raises:
            MalformedXML: If no start element can be read.
        """
        if isinstance(source, str):
            source = source.encode('utf-8')
        handler = cls()
        parser = sax.make_parser()
        parser.setContentHandler(handler)
        try:
            for offset in range(0, len(source), chunk_size):
                parser.feed(source[offset:offset + chunk_size])
            parser.close()
        except _RootFound:
            return handler.tag, handler.attrs
        except sax.SAXParseException as e:
            raise MalformedXML(str(e)) from e
        raise MalformedXML('no element found')

    def startElement(self, name: str, attributes: Any) -> None:
        self.tag = name
        self.attrs = {str(k): v for k, v in attributes.items()}
        raise _RootFound


def root_namespace(tag: str, attrs: dict[str, str]) -> str:
    """Namespace the document element is bound to by its own declarations."""
    prefix, _ = split_qname(tag)
    return attrs.get(f'xmlns:{prefix}' if prefix else 'xmlns', '')


def namespace_candidates(attrs: dict[str, str]) -> list[str]:
    """Declared namespace URIs, default declaration first, then document order."""
    candidates = []
    if attrs.get('xmlns'):
        candidates.append(attrs['xmlns'])
    for qname, value in attrs.items():
        if qname != 'xmlns' and is_namespace_declaration(qname) and value:
            candidates.append(value)
    return candidates


def detect(source: str | bytes, registry: TypeRegistry) -> tuple[str, str, str]:
    """Classify a document as (family, version, root element).

    When the document element is not bound to a namespace, the declared
    namespaces are tried in order (default declaration first) and the
    first one registered for the element's local name is used.

    Raises:
        MalformedXML: If no start element can be read.
        UnrecognizedDocument: If no registered type matches.
    """
    tag, attrs = RootElementSniffer.sniff(source)
    local = split_qname(tag)[1]
    namespace = root_namespace(tag, attrs)
    if namespace:
        candidates = [namespace]
    else:
        candidates = namespace_candidates(attrs)
    for candidate in candidates:
        found = registry.find(local, candidate)
        if found is not None:
            logger.debug("detected %s/%s/%s", *found)
            return found
    raise UnrecognizedDocument(local, namespace or (candidates[0] if candidates else ''))


def _tag_stage(error: DdexError, stage: str) -> None:
    if error.stage is None:
        error.stage = stage


def parse_any(source: str | bytes, registry: TypeRegistry) -> tuple[RootMessage, str, str]:
    """Detect the message type of a document and decode it.

    Returns:
        (message, family, version)

    Raises:
        DdexError: From the failing stage, with ``stage`` set to 'detect',
            'lookup' or 'decode'.
    """
    try:
        family, version, root_element = detect(source, registry)
    except DdexError as e:
        _tag_stage(e, 'detect')
        raise
    try:
        message = registry.descriptor(family, version, root_element).factory()
    except DdexError as e:
        _tag_stage(e, 'lookup')
        raise
    try:
        return _decode_into(message, source), family, version
    except DdexError as e:
        _tag_stage(e, 'decode')
        raise


def parse_known(source: str | bytes, family: str, version: str, registry: TypeRegistry) -> RootMessage:
    """Decode a document as the registered type of family/version.

    For families with several root messages, the type is chosen as in
    TypeRegistry.lookup.
    """
    try:
        message = registry.lookup(family, version)()
    except DdexError as e:
        _tag_stage(e, 'lookup')
        raise
    try:
        return _decode_into(message, source)
    except DdexError as e:
        _tag_stage(e, 'decode')
        raise


def _decode_into(message: RootMessage, source: str | bytes) -> RootMessage:
    return message.decode_element(XmlTreeParser.parse(source))


class MessageSniffer:
    """Detection and dispatch bound to one registry.

    Example:
        >>> sniffer = MessageSniffer(build_registry())
        >>> sniffer.detect(xml_bytes)
        ('mead', '11', 'MeadMessage')
        >>> output = sniffer.round_trip(xml_bytes)
    """

    def __init__(self, registry: TypeRegistry):
        self.registry = registry

    def detect(self, source: str | bytes) -> tuple[str, str, str]:
        return detect(source, self.registry)

    def parse_any(self, source: str | bytes) -> tuple[RootMessage, str, str]:
        return parse_any(source, self.registry)

    def parse_known(self, source: str | bytes, family: str, version: str) -> RootMessage:
        return parse_known(source, family, version, self.registry)

    def round_trip(self, source: str | bytes, pretty: bool = True) -> bytes:
        """Decode a document of any registered type and encode it again."""
        message, _, _ = self.parse_any(source)
        try:
            return message.encode(pretty=pretty)
        except DdexError as e:
            _tag_stage(e, 'encode')
            raise
