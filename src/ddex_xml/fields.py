# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Typed field bindings for message dataclasses.

A message type is a dataclass whose fields are declared with one of the
helpers below; the binding (element, attribute or character data, XML name,
value type, repetition) travels in the field metadata::

    @dataclass
    class Title(Message):
        language: str | None = xml_attr('LanguageAndScriptCode')
        title_text: str | None = xml_element('TitleText', required=True)
        sub_titles: list[str] = xml_element('SubTitle', repeated=True)

Scalar values other than strings are converted with genro_tytx, the same
typed-text encoding used for ``value::TYPE`` strings.
"""

from __future__ import annotations

import dataclasses
import datetime
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Any

from genro_toolbox import safe_is_instance
from genro_tytx import from_tytx, to_tytx

from .enums import XmlEnum

ELEMENT = 'element'
ATTRIBUTE = 'attr'
CHARDATA = 'chardata'

_METADATA_KEY = 'xml'

# python type -> genro_tytx type code
TYTX_CODES: dict[type, str] = {
    int: 'L',
    float: 'R',
    Decimal: 'N',
    datetime.date: 'D',
    datetime.datetime: 'DH',
}


@dataclass(frozen=True)
class FieldBinding:
    """How one dataclass field maps to XML."""

    kind: str
    name: str
    attr: str
    type: Any = str
    repeated: bool = False
    required: bool = False


def xml_element(
    name: str,
    type: Any = str,
    repeated: bool = False,
    required: bool = False,
) -> Any:
    """Declare a field bound to a child element (list when repeated)."""
    metadata = {_METADATA_KEY: (ELEMENT, name, type, repeated, required)}
    if repeated:
        return dataclasses.field(default_factory=list, metadata=metadata)
    return dataclasses.field(default=None, metadata=metadata)


def xml_attr(name: str, type: Any = str, required: bool = False) -> Any:
    """Declare a field bound to an attribute of the element."""
    return dataclasses.field(
        default=None,
        metadata={_METADATA_KEY: (ATTRIBUTE, name, type, False, required)},
    )


def xml_text(type: Any = str) -> Any:
    """Declare a field bound to the element's character data."""
    return dataclasses.field(
        default=None,
        metadata={_METADATA_KEY: (CHARDATA, '', type, False, False)},
    )


@lru_cache(maxsize=None)
def bindings(cls: type) -> tuple[FieldBinding, ...]:
    """XML bindings of a message dataclass, in declaration order."""
    result = []
    for f in dataclasses.fields(cls):
        entry = f.metadata.get(_METADATA_KEY)
        if entry is None:
            continue
        kind, name, type_, repeated, required = entry
        result.append(FieldBinding(kind, name, f.name, type_, repeated, required))
    return tuple(result)


@lru_cache(maxsize=None)
def attribute_names(cls: type) -> frozenset[str]:
    """Names of the attributes produced by typed fields of cls."""
    return frozenset(b.name for b in bindings(cls) if b.kind == ATTRIBUTE)


def text_to_value(text: str, type_: Any) -> Any:
    """Convert XML text to a typed python value.

    Raises:
        ValueError: If text is not a valid representation of type_.
    """
    if type_ is str:
        return text
    text = text.strip()
    if type_ is bool:
        if text in ('true', '1'):
            return True
        if text in ('false', '0'):
            return False
        raise ValueError(f"invalid boolean '{text}'")
    if isinstance(type_, type) and issubclass(type_, XmlEnum):
        member, found = type_.parse_xml_string(text)
        if not found:
            raise ValueError(f"'{text}' is not a {type_.__name__} value")
        return member
    code = TYTX_CODES.get(type_)
    if code is None:
        raise TypeError(f"unsupported field type {type_!r}")
    try:
        return from_tytx(f'{text}::{code}')
    except Exception as e:
        raise ValueError(f"invalid {type_.__name__} '{text}'") from e


def value_to_text(value: Any) -> str:
    """Convert a typed python value to XML text.

    Raises:
        TypeError: If value is a message (messages are elements, not text).
    """
    if isinstance(value, str):
        return value
    # Message lives in a module that imports this one
    if safe_is_instance(value, 'ddex_xml.message.Message'):
        raise TypeError(f"{type(value).__name__} cannot be written as text")
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, XmlEnum):
        return value.xml_string()
    encoded = to_tytx(value, _force_suffix=True)
    if isinstance(encoded, str) and '::' in encoded:
        text, _ = encoded.rsplit('::', 1)
        return text
    return str(value)
