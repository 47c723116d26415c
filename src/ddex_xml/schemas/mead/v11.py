# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""MEAD 1.1 media enrichment and description messages."""

from __future__ import annotations

from dataclasses import dataclass

from ...enums import XmlEnum
from ...fields import xml_attr, xml_element, xml_text
from ...message import Message, RootMessage
from ...namespaces import resolve_namespace
from .._common import MessageHeader, ReleaseId, Title, ValidityPeriod

NAMESPACE_INFO = resolve_namespace('mead', '11')


class MoodType(XmlEnum):
    MOOD_TYPE_UNSPECIFIED = 0
    MOOD_TYPE_CALM = 1
    MOOD_TYPE_ENERGETIC = 2
    MOOD_TYPE_MELANCHOLIC = 3


@dataclass
class Mood(Message):
    namespace: str | None = xml_attr('Namespace')
    user_defined_value: str | None = xml_attr('UserDefinedValue')
    value: str | None = xml_text()


@dataclass
class ReleaseSummary(Message):
    release_id: ReleaseId | None = xml_element('ReleaseId', ReleaseId, required=True)
    display_title: list[Title] = xml_element('DisplayTitle', Title, repeated=True)


@dataclass
class ReleaseInformation(Message):
    release_summary: ReleaseSummary | None = xml_element('ReleaseSummary', ReleaseSummary)
    mood: list[Mood] = xml_element('Mood', Mood, repeated=True)
    validity_period: ValidityPeriod | None = xml_element('ValidityPeriod', ValidityPeriod)


@dataclass
class ReleaseInformationList(Message):
    release_information: list[ReleaseInformation] = xml_element(
        'ReleaseInformation', ReleaseInformation, repeated=True)


@dataclass
class MeadMessage(RootMessage):
    NAMESPACE_INFO = NAMESPACE_INFO

    avs_version_id: str | None = xml_attr('AvsVersionId')
    language_and_script_code: str | None = xml_attr('LanguageAndScriptCode')
    message_header: MessageHeader | None = xml_element('MessageHeader', MessageHeader)
    release_information_list: ReleaseInformationList | None = xml_element(
        'ReleaseInformationList', ReleaseInformationList)
