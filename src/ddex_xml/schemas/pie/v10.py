# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""PIE 1.0 party identification and enrichment messages."""

from __future__ import annotations

from dataclasses import dataclass

from ...fields import xml_attr, xml_element
from ...message import Message, RootMessage
from ...namespaces import resolve_namespace
from .._common import MessageHeader, PartyName, ProprietaryId

NAMESPACE_INFO = resolve_namespace('pie', '10')


@dataclass
class PartyId(Message):
    isni: str | None = xml_element('ISNI')
    ipi_name_number: str | None = xml_element('IpiNameNumber')
    proprietary_id: list[ProprietaryId] = xml_element('ProprietaryId', ProprietaryId, repeated=True)


@dataclass
class Award(Message):
    award_name: str | None = xml_element('AwardName')
    date: str | None = xml_element('Date')
    is_winner: bool | None = xml_element('IsWinner', bool)


@dataclass
class Party(Message):
    party_reference: str | None = xml_element('PartyReference')
    party_id: list[PartyId] = xml_element('PartyId', PartyId, repeated=True)
    party_name: list[PartyName] = xml_element('PartyName', PartyName, repeated=True)
    award: list[Award] = xml_element('Award', Award, repeated=True)


@dataclass
class PartyList(Message):
    party: list[Party] = xml_element('Party', Party, repeated=True)


@dataclass
class PieMessage(RootMessage):
    NAMESPACE_INFO = NAMESPACE_INFO

    avs_version_id: str | None = xml_attr('AvsVersionId')
    language_and_script_code: str | None = xml_attr('LanguageAndScriptCode')
    message_header: MessageHeader | None = xml_element('MessageHeader', MessageHeader)
    party_list: PartyList | None = xml_element('PartyList', PartyList)


@dataclass
class PieRequestMessage(RootMessage):
    NAMESPACE_INFO = NAMESPACE_INFO

    avs_version_id: str | None = xml_attr('AvsVersionId')
    language_and_script_code: str | None = xml_attr('LanguageAndScriptCode')
    message_header: MessageHeader | None = xml_element('MessageHeader', MessageHeader)
    request_reason: str | None = xml_element('RequestReason')
    party: list[Party] = xml_element('Party', Party, repeated=True)
