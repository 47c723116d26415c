# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Message types and the namespace-faithful codec.

Every schema type is a dataclass deriving from Message; root messages
(document elements) derive from RootMessage, which adds the side channel
that keeps namespace declarations and schema-instance hints across a
decode -> mutate -> encode cycle.

Decode of a root message:
    1. ``namespace_attrs`` becomes an empty dict.
    2. ``xmlns`` / ``xmlns:p`` declarations are stored under ``'xmlns'`` /
       ``'xmlns:p'``; ``schemaLocation`` in the XML Schema instance namespace
       under ``'xsi:schemaLocation'``. Other attributes are left to typed
       fields (and dropped if no field claims them).
    3. Typed fields are decoded.

Encode of a root message:
    1. Typed fields are encoded; their attribute names form the shadow set.
    2. Side-channel entries not in the shadow set are re-attached.
    3. The element always carries the type's namespace.

Example:
    >>> msg = NewReleaseMessage.decode(xml_bytes)
    >>> msg.namespace_attrs['xsi:schemaLocation']
    'http://ddex.net/xml/ern/432 release.xsd'
    >>> msg.encode()
    b'<ern:NewReleaseMessage xmlns:ern=...'
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, ClassVar

from .exceptions import DecodeError, EncodeError
from .fields import ATTRIBUTE, CHARDATA, ELEMENT, attribute_names, bindings, text_to_value, value_to_text
from .namespaces import NAMESPACE_XSI, NamespaceInfo
from .xml_tree import XmlElement, XmlTreeParser, XmlWriter, is_namespace_declaration, split_qname


@dataclass
class Message:
    """Base class of all schema types (nested and root)."""

    @classmethod
    def from_element(cls, element: XmlElement) -> Message:
        """Decode an element into a new instance of cls."""
        return cls._from_element(element, '/' + element.local, cls.__name__)

    @classmethod
    def _from_element(cls, element: XmlElement, path: str, root_name: str) -> Message:
        instance = cls()
        instance._decode_fields(element, path, root_name)
        return instance

    def _decode_fields(self, element: XmlElement, path: str, root_name: str) -> None:
        for binding in bindings(type(self)):
            if binding.kind == ATTRIBUTE:
                raw = element.attrs.get(binding.name)
                if raw is None:
                    if binding.required:
                        raise DecodeError(root_name, f"missing attribute '{binding.name}'", path)
                    continue
                value = self._scalar(raw, binding.type, root_name, f'{path}@{binding.name}')
                setattr(self, binding.attr, value)

            elif binding.kind == CHARDATA:
                if element.text and not element.children:
                    setattr(self, binding.attr,
                            self._scalar(element.text, binding.type, root_name, path))

            elif binding.kind == ELEMENT:
                children = element.child_elements(binding.name)
                if not children:
                    if binding.required:
                        raise DecodeError(root_name, f"missing element '{binding.name}'", path)
                    continue
                values = []
                for idx, child in enumerate(children):
                    child_path = f'{path}/{binding.name}'
                    if idx:
                        child_path = f'{child_path}[{idx + 1}]'
                    if _is_message_type(binding.type):
                        values.append(binding.type._from_element(child, child_path, root_name))
                    else:
                        values.append(self._scalar(child.text, binding.type, root_name, child_path))
                    if not binding.repeated:
                        break
                setattr(self, binding.attr, values if binding.repeated else values[0])

    @staticmethod
    def _scalar(text: str, type_: Any, root_name: str, path: str) -> Any:
        try:
            return text_to_value(text, type_)
        except (TypeError, ValueError) as e:
            raise DecodeError(root_name, str(e), path) from e

    def to_element(self, tag: str) -> XmlElement:
        """Encode this value as an element named tag."""
        return self._to_element(tag, '/' + tag, type(self).__name__)

    def _to_element(self, tag: str, path: str, root_name: str) -> XmlElement:
        element = XmlElement(tag)
        element.attrs.update(self._encode_attributes(path, root_name))
        self._encode_content(element, path, root_name)
        return element

    def _encode_attributes(self, path: str, root_name: str) -> dict[str, str]:
        """Attributes produced by typed fields, in declaration order."""
        attrs = {}
        for binding in bindings(type(self)):
            if binding.kind != ATTRIBUTE:
                continue
            value = getattr(self, binding.attr)
            if value is None:
                if binding.required:
                    raise EncodeError(root_name, f"missing attribute '{binding.name}'", path)
                continue
            attrs[binding.name] = self._text(value, root_name, f'{path}@{binding.name}')
        return attrs

    def _encode_content(self, element: XmlElement, path: str, root_name: str) -> None:
        for binding in bindings(type(self)):
            value = getattr(self, binding.attr)
            if binding.kind == CHARDATA:
                if value is not None:
                    element.text = self._text(value, root_name, path)

            elif binding.kind == ELEMENT:
                child_path = f'{path}/{binding.name}'
                if binding.repeated:
                    if not isinstance(value, (list, tuple)):
                        raise EncodeError(root_name, f"'{binding.attr}' must be a list", child_path)
                    values = value
                else:
                    values = [] if value is None else [value]
                if not values and binding.required:
                    raise EncodeError(root_name, f"missing element '{binding.name}'", path)
                for item in values:
                    if item is None:
                        continue
                    if isinstance(item, Message):
                        element.append(item._to_element(binding.name, child_path, root_name))
                    else:
                        element.append(XmlElement(binding.name,
                                                  text=self._text(item, root_name, child_path)))

    @staticmethod
    def _text(value: Any, root_name: str, path: str) -> str:
        try:
            return value_to_text(value)
        except (TypeError, ValueError) as e:
            raise EncodeError(root_name, str(e), path) from e


def _is_message_type(type_: Any) -> bool:
    return isinstance(type_, type) and issubclass(type_, Message)


@dataclass
class RootMessage(Message):
    """A message that is the outermost element of a document.

    Class attributes:
        ROOT_ELEMENT: Local name of the document element (defaults to the
            class name).
        NAMESPACE_INFO: Namespace of the schema package defining the type.

    Attributes:
        namespace_attrs: Side channel of namespace declarations and
            schema-instance attributes. None until first decode or encode.
    """

    ROOT_ELEMENT: ClassVar[str] = ''
    NAMESPACE_INFO: ClassVar[NamespaceInfo | None] = None

    namespace_attrs: dict[str, str] | None = dataclasses.field(default=None, repr=False)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if not cls.__dict__.get('ROOT_ELEMENT'):
            cls.ROOT_ELEMENT = cls.__name__

    @classmethod
    def namespace(cls) -> str:
        return cls.NAMESPACE_INFO.namespace if cls.NAMESPACE_INFO else ''

    # -------------------------------------------------------------------------
    # Decode
    # -------------------------------------------------------------------------

    @classmethod
    def decode(cls, data: str | bytes) -> RootMessage:
        """Parse an XML document into a new instance of cls.

        Raises:
            MalformedXML: If data is not well-formed.
            DecodeError: If the document does not bind to cls.
        """
        return cls.from_element(XmlTreeParser.parse(data))

    @classmethod
    def from_element(cls, element: XmlElement) -> RootMessage:
        return cls().decode_element(element)

    def decode_element(self, element: XmlElement) -> RootMessage:
        """Decode a document element into this instance and return it.

        The side channel is reset before decoding, so entries of a previous
        decode do not leak into this one.
        """
        root_name = type(self).__name__
        if element.local != self.ROOT_ELEMENT:
            raise DecodeError(
                root_name,
                f"expected root element '{self.ROOT_ELEMENT}', got '{element.local}'",
                '/' + element.local,
            )
        self.namespace_attrs = {}
        self._decode_fields(element, '/' + element.local, root_name)
        return self

    def _decode_fields(self, element: XmlElement, path: str, root_name: str) -> None:
        if self.namespace_attrs is None:
            self.namespace_attrs = {}
        self.namespace_attrs.update(capture_side_channel(element))
        super()._decode_fields(element, path, root_name)

    # -------------------------------------------------------------------------
    # Encode
    # -------------------------------------------------------------------------

    def encode(self, pretty: bool = False, xml_declaration: bool = False) -> bytes:
        """Serialize to UTF-8 XML bytes rooted at ROOT_ELEMENT.

        Raises:
            EncodeError: If a typed field cannot be written.
        """
        element = self.to_element()
        return XmlWriter.serialize(
            element, xml_declaration=xml_declaration, pretty=pretty
        ).encode('utf-8')

    def to_element(self, tag: str | None = None) -> XmlElement:
        root_name = type(self).__name__
        namespace = self.namespace()
        if not namespace:
            raise EncodeError(root_name, 'message type has no namespace')
        local = tag or self.ROOT_ELEMENT
        path = '/' + local
        if self.namespace_attrs is None:
            self.namespace_attrs = {}

        # pass 1: typed fields, which own their attribute names
        typed_attrs = self._encode_attributes(path, root_name)
        existing_keys = set(attribute_names(type(self)))

        prefix = self._namespace_prefix(namespace)
        element_attrs: dict[str, str] = {}
        if prefix:
            qname = f'{prefix}:{local}'
        else:
            qname = local
            element_attrs['xmlns'] = namespace
            existing_keys.add('xmlns')

        # pass 2: side channel, minus what typed fields already produce
        for key, value in self.namespace_attrs.items():
            if key in existing_keys:
                continue
            if key == 'xsi:schemaLocation' and 'xmlns:xsi' not in self.namespace_attrs:
                # captured under another prefix; the xsi key needs its own binding
                element_attrs['xmlns:xsi'] = NAMESPACE_XSI
            element_attrs[key] = value
        element_attrs.update(typed_attrs)

        element = XmlElement(qname, attrs=element_attrs)
        self._encode_content(element, path, root_name)
        return element

    def _namespace_prefix(self, namespace: str) -> str:
        """Prefix to write the element with; '' for the default namespace.

        The default declaration wins when the side channel has one for the
        message namespace, otherwise the first prefix declared for it.
        """
        attrs = self.namespace_attrs or {}
        if attrs.get('xmlns') == namespace:
            return ''
        for key, value in attrs.items():
            if value == namespace and key.startswith('xmlns:'):
                return key[6:]
        return ''

    def effective_namespace_attrs(self) -> dict[str, str]:
        """Side channel entries that are not shadowed by typed fields."""
        shadowed = attribute_names(type(self))
        return {k: v for k, v in (self.namespace_attrs or {}).items() if k not in shadowed}


def capture_side_channel(element: XmlElement) -> dict[str, str]:
    """Namespace declarations and xsi:schemaLocation of an element."""
    captured = {}
    for qname, value in element.attrs.items():
        if is_namespace_declaration(qname):
            prefix, local = split_qname(qname)
            captured[f'xmlns:{local}' if prefix else 'xmlns'] = value
        elif (element.attr_namespace(qname) == NAMESPACE_XSI
              and split_qname(qname)[1] == 'schemaLocation'):
            captured['xsi:schemaLocation'] = value
    return captured
