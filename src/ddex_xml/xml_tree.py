# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Ordered XML element tree used by the codec and the round-trip oracle.

The parser runs SAX with namespace processing disabled, so namespace
declarations reach the handler as ordinary attributes (``xmlns``,
``xmlns:ern``) and nothing written in the source is hidden from the codec.
Prefixes are resolved by the handler itself through scoped declarations.

Classes:
    XmlElement - one element: qualified tag, ordered attributes, text, children
    XmlTreeParser - parse XML to an XmlElement tree (SAX handler)
    XmlWriter - serialize an XmlElement tree back to XML
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any
from xml import sax
from xml.sax import saxutils

from .exceptions import MalformedXML
from .namespaces import NAMESPACE_XML


def split_qname(qname: str) -> tuple[str, str]:
    """Split 'prefix:local' into (prefix, local); prefix is '' when absent."""
    prefix, sep, local = qname.partition(':')
    if not sep:
        return '', qname
    return prefix, local


def is_namespace_declaration(qname: str) -> bool:
    """True for 'xmlns' and 'xmlns:prefix' attribute names."""
    return qname == 'xmlns' or qname.startswith('xmlns:')


class XmlElement:
    """One XML element with its attributes in document order.

    Attributes:
        tag: Qualified name as written in the source ('ern:NewReleaseMessage').
        prefix: Prefix part of tag ('' when unprefixed).
        local: Local part of tag.
        namespace: Namespace URI the prefix resolves to ('' if none).
        attrs: Qualified attribute name -> value, insertion ordered.
        text: Character data directly inside this element.
        children: Child elements in document order.
        scope: Prefix -> namespace URI visible on this element.
    """

    __slots__ = ('tag', 'prefix', 'local', 'namespace', 'attrs', 'text',
                 'children', 'parent', 'scope')

    def __init__(
        self,
        tag: str,
        attrs: dict[str, str] | None = None,
        text: str = '',
        namespace: str = '',
        scope: dict[str, str] | None = None,
    ):
        self.tag = tag
        self.prefix, self.local = split_qname(tag)
        self.namespace = namespace
        self.attrs: dict[str, str] = dict(attrs) if attrs else {}
        self.text = text
        self.children: list[XmlElement] = []
        self.parent: XmlElement | None = None
        self.scope: dict[str, str] = scope if scope is not None else {}

    def __repr__(self) -> str:
        return f"XmlElement({self.tag!r}, attrs={len(self.attrs)}, children={len(self.children)})"

    def append(self, child: XmlElement) -> XmlElement:
        child.parent = self
        self.children.append(child)
        return child

    def child_elements(self, local: str | None = None) -> list[XmlElement]:
        """Children, optionally filtered by local name."""
        if local is None:
            return list(self.children)
        return [c for c in self.children if c.local == local]

    def resolve_prefix(self, prefix: str) -> str | None:
        """Namespace URI bound to prefix in this element's scope."""
        return self.scope.get(prefix)

    def attr_namespace(self, qname: str) -> str:
        """Namespace URI of an attribute (unprefixed attributes have none)."""
        prefix, _ = split_qname(qname)
        if not prefix:
            return ''
        return self.scope.get(prefix, '')

    def iter(self) -> Iterator[XmlElement]:
        """Depth-first iteration over this element and its descendants."""
        yield self
        for child in self.children:
            yield from child.iter()


class XmlTreeParser(sax.handler.ContentHandler):
    """SAX handler building an XmlElement tree.

    Example:
        >>> root = XmlTreeParser.parse(b'<a xmlns="urn:x"><b>1</b></a>')
        >>> root.namespace, root.children[0].text
        ('urn:x', '1')
    """

    def __init__(self) -> None:
        super().__init__()
        self.root: XmlElement | None = None
        self.stack: list[XmlElement] = []
        self.value_list: list[str] = []

    @classmethod
    def parse(cls, source: str | bytes) -> XmlElement:
        """Parse XML source into its root XmlElement.

        Raises:
            MalformedXML: If the source is not well-formed XML.
        """
        if isinstance(source, str):
            source = source.encode('utf-8')
        handler = cls()
        try:
            sax.parseString(source, handler)
        except sax.SAXParseException as e:
            raise MalformedXML(str(e)) from e
        if handler.root is None:
            raise MalformedXML('no element found')
        return handler.root

    @staticmethod
    def open_scope(parent_scope: dict[str, str], attributes: Any) -> dict[str, str]:
        """Return the prefix bindings visible on an element ('' is the default)."""
        declared = {
            k: v for k, v in attributes.items() if is_namespace_declaration(k)
        }
        if not declared:
            return parent_scope
        scope = dict(parent_scope)
        for qname, uri in declared.items():
            scope[split_qname(qname)[1] if qname != 'xmlns' else ''] = uri
        return scope

    def startDocument(self) -> None:
        self.root = None
        self.stack = []
        self.value_list = []

    def startElement(self, name: str, attributes: Any) -> None:
        self._flush_text()
        parent_scope = self.stack[-1].scope if self.stack else {'xml': NAMESPACE_XML}
        scope = self.open_scope(parent_scope, attributes)
        prefix, _ = split_qname(name)
        element = XmlElement(
            name,
            attrs={str(k): v for k, v in attributes.items()},
            namespace=scope.get(prefix, ''),
            scope=scope,
        )
        if self.stack:
            self.stack[-1].append(element)
        else:
            self.root = element
        self.stack.append(element)

    def characters(self, content: str) -> None:
        self.value_list.append(content)

    def endElement(self, name: str) -> None:
        self._flush_text()
        self.stack.pop()

    def _flush_text(self) -> None:
        """Attach accumulated character data to the current element."""
        if self.value_list and self.stack:
            self.stack[-1].text += ''.join(self.value_list)
        self.value_list = []


class XmlWriter:
    """Serialize an XmlElement tree.

    Attributes are written in their insertion order; character data is only
    written for elements without children (mixed content is not modelled).
    """

    def __init__(self, pretty: bool = False, indent: str = '  '):
        self.pretty = pretty
        self.indent = indent

    @classmethod
    def serialize(
        cls,
        element: XmlElement,
        xml_declaration: bool = False,
        pretty: bool = False,
        encoding: str = 'UTF-8',
    ) -> str:
        """Serialize element to an XML string.

        Args:
            element: Root of the tree to write.
            xml_declaration: Prefix the result with an XML declaration.
            pretty: Indent nested elements.
            encoding: Encoding named in the declaration.
        """
        content = cls(pretty=pretty)._element_to_xml(element, 0)
        if xml_declaration:
            content = f'<?xml version="1.0" encoding="{encoding}"?>\n{content}'
        return content

    def _element_to_xml(self, element: XmlElement, depth: int) -> str:
        attrs_str = ''.join(
            f' {k}={saxutils.quoteattr(str(v))}' for k, v in element.attrs.items()
        )
        tag = element.tag
        if element.children:
            inner = [self._element_to_xml(c, depth + 1) for c in element.children]
            if self.pretty:
                pad = '\n' + self.indent * (depth + 1)
                body = pad + pad.join(inner) + '\n' + self.indent * depth
            else:
                body = ''.join(inner)
            return f'<{tag}{attrs_str}>{body}</{tag}>'
        if not element.text:
            return f'<{tag}{attrs_str}/>'
        return f'<{tag}{attrs_str}>{saxutils.escape(element.text)}</{tag}>'
