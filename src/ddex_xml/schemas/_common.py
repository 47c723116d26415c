# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Types shared by all DDEX message families.

Nested types carry no namespace of their own: DDEX schemas use unqualified
local elements, so only the root message is bound to a namespace.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..enums import XmlEnum
from ..fields import xml_attr, xml_element, xml_text
from ..message import Message


class UpdateIndicator(XmlEnum):
    UPDATE_INDICATOR_UNSPECIFIED = 0
    UPDATE_INDICATOR_ORIGINAL_MESSAGE = 1
    UPDATE_INDICATOR_UPDATE_MESSAGE = 2


class MessageControlType(XmlEnum):
    MESSAGE_CONTROL_TYPE_UNSPECIFIED = 0
    MESSAGE_CONTROL_TYPE_LIVE_MESSAGE = 1
    MESSAGE_CONTROL_TYPE_TEST_MESSAGE = 2


class ParentalWarningType(XmlEnum):
    PARENTAL_WARNING_TYPE_UNSPECIFIED = 0
    PARENTAL_WARNING_TYPE_EXPLICIT = 1
    PARENTAL_WARNING_TYPE_EXPLICIT_CONTENT_EDITED = 2
    PARENTAL_WARNING_TYPE_NOT_EXPLICIT = 3
    PARENTAL_WARNING_TYPE_NO_ADVICE_AVAILABLE = 4


@dataclass
class PartyName(Message):
    language_and_script_code: str | None = xml_attr('LanguageAndScriptCode')
    full_name: str | None = xml_element('FullName', required=True)
    full_name_indexed: str | None = xml_element('FullNameIndexed')


@dataclass
class ProprietaryId(Message):
    namespace: str | None = xml_attr('Namespace')
    value: str | None = xml_text()


@dataclass
class MessagingParty(Message):
    party_id: list[str] = xml_element('PartyId', repeated=True)
    dpid: str | None = xml_element('DPID')
    party_name: PartyName | None = xml_element('PartyName', PartyName)
    trading_name: str | None = xml_element('TradingName')


@dataclass
class MessageHeader(Message):
    message_thread_id: str | None = xml_element('MessageThreadId')
    message_id: str | None = xml_element('MessageId', required=True)
    message_file_name: str | None = xml_element('MessageFileName')
    message_sender: MessagingParty | None = xml_element('MessageSender', MessagingParty)
    sent_on_behalf_of: MessagingParty | None = xml_element('SentOnBehalfOf', MessagingParty)
    message_recipient: list[MessagingParty] = xml_element(
        'MessageRecipient', MessagingParty, repeated=True)
    message_created_date_time: str | None = xml_element('MessageCreatedDateTime')
    message_control_type: str | None = xml_element('MessageControlType')


@dataclass
class Title(Message):
    language_and_script_code: str | None = xml_attr('LanguageAndScriptCode')
    title_type: str | None = xml_attr('TitleType')
    title_text: str | None = xml_element('TitleText')
    sub_title: list[str] = xml_element('SubTitle', repeated=True)


@dataclass
class ReleaseId(Message):
    grid: str | None = xml_element('GRid')
    icpn: str | None = xml_element('ICPN')
    catalog_number: str | None = xml_element('CatalogNumber')
    isrc: str | None = xml_element('ISRC')
    proprietary_id: list[ProprietaryId] = xml_element('ProprietaryId', ProprietaryId, repeated=True)


@dataclass
class ValidityPeriod(Message):
    start_date: str | None = xml_element('StartDate')
    end_date: str | None = xml_element('EndDate')


@dataclass
class Price(Message):
    currency_code: str | None = xml_attr('CurrencyCode')
    amount: Decimal | None = xml_text(Decimal)
