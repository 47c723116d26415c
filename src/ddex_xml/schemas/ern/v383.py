# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""ERN 3.8.3 release notification messages."""

from __future__ import annotations

from dataclasses import dataclass

from ...enums import XmlEnum
from ...fields import xml_attr, xml_element
from ...message import Message, RootMessage
from ...namespaces import resolve_namespace
from .._common import (  # noqa: F401
    MessageHeader,
    ParentalWarningType,
    Price,
    ReleaseId,
    Title,
    UpdateIndicator,
    ValidityPeriod,
)

NAMESPACE_INFO = resolve_namespace('ern', '383')


class ReleaseType(XmlEnum):
    RELEASE_TYPE_UNSPECIFIED = 0
    RELEASE_TYPE_ALBUM = 1
    RELEASE_TYPE_SINGLE = 2
    RELEASE_TYPE_TRACK_RELEASE = 3


@dataclass
class SoundRecordingId(Message):
    isrc: str | None = xml_element('ISRC')
    catalog_number: str | None = xml_element('CatalogNumber')


@dataclass
class SoundRecording(Message):
    sound_recording_type: str | None = xml_element('SoundRecordingType')
    sound_recording_id: list[SoundRecordingId] = xml_element(
        'SoundRecordingId', SoundRecordingId, repeated=True)
    resource_reference: str | None = xml_element('ResourceReference', required=True)
    reference_title: Title | None = xml_element('ReferenceTitle', Title)
    duration: str | None = xml_element('Duration')


@dataclass
class ResourceList(Message):
    sound_recording: list[SoundRecording] = xml_element(
        'SoundRecording', SoundRecording, repeated=True)


@dataclass
class Release(Message):
    is_main_release: bool | None = xml_attr('IsMainRelease', bool)
    release_id: list[ReleaseId] = xml_element('ReleaseId', ReleaseId, repeated=True)
    release_reference: list[str] = xml_element('ReleaseReference', repeated=True)
    reference_title: Title | None = xml_element('ReferenceTitle', Title)
    release_type: list[str] = xml_element('ReleaseType', repeated=True)
    duration: str | None = xml_element('Duration')
    global_original_release_date: str | None = xml_element('GlobalOriginalReleaseDate')


@dataclass
class ReleaseList(Message):
    release: list[Release] = xml_element('Release', Release, repeated=True)


@dataclass
class DealTerms(Message):
    commercial_model_type: list[str] = xml_element('CommercialModelType', repeated=True)
    usage: list[str] = xml_element('Usage', repeated=True)
    territory_code: list[str] = xml_element('TerritoryCode', repeated=True)
    price_information: list[Price] = xml_element('WholesalePricePerUnit', Price, repeated=True)
    validity_period: list[ValidityPeriod] = xml_element(
        'ValidityPeriod', ValidityPeriod, repeated=True)


@dataclass
class Deal(Message):
    deal_terms: DealTerms | None = xml_element('DealTerms', DealTerms)


@dataclass
class ReleaseDeal(Message):
    deal_release_reference: list[str] = xml_element('DealReleaseReference', repeated=True)
    deal: list[Deal] = xml_element('Deal', Deal, repeated=True)


@dataclass
class DealList(Message):
    release_deal: list[ReleaseDeal] = xml_element('ReleaseDeal', ReleaseDeal, repeated=True)


@dataclass
class CatalogItem(Message):
    territory_code: list[str] = xml_element('TerritoryCode', repeated=True)
    release_id: ReleaseId | None = xml_element('ReleaseId', ReleaseId, required=True)
    reference_title: Title | None = xml_element('ReferenceTitle', Title)
    catalog_release_reference: str | None = xml_element('CatalogReleaseReference')


@dataclass
class PurgedRelease(Message):
    release_id: list[ReleaseId] = xml_element('ReleaseId', ReleaseId, repeated=True)
    title: list[Title] = xml_element('Title', Title, repeated=True)


@dataclass
class NewReleaseMessage(RootMessage):
    NAMESPACE_INFO = NAMESPACE_INFO

    message_schema_version_id: str | None = xml_attr('MessageSchemaVersionId')
    business_profile_version_id: str | None = xml_attr('BusinessProfileVersionId')
    release_profile_version_id: str | None = xml_attr('ReleaseProfileVersionId')
    language_and_script_code: str | None = xml_attr('LanguageAndScriptCode')
    message_header: MessageHeader | None = xml_element('MessageHeader', MessageHeader)
    update_indicator: str | None = xml_element('UpdateIndicator')
    resource_list: ResourceList | None = xml_element('ResourceList', ResourceList)
    release_list: ReleaseList | None = xml_element('ReleaseList', ReleaseList)
    deal_list: DealList | None = xml_element('DealList', DealList)


@dataclass
class PurgeReleaseMessage(RootMessage):
    NAMESPACE_INFO = NAMESPACE_INFO

    message_schema_version_id: str | None = xml_attr('MessageSchemaVersionId')
    language_and_script_code: str | None = xml_attr('LanguageAndScriptCode')
    message_header: MessageHeader | None = xml_element('MessageHeader', MessageHeader)
    purged_release: PurgedRelease | None = xml_element('PurgedRelease', PurgedRelease)


@dataclass
class CatalogListMessage(RootMessage):
    NAMESPACE_INFO = NAMESPACE_INFO

    message_schema_version_id: str | None = xml_attr('MessageSchemaVersionId')
    language_and_script_code: str | None = xml_attr('LanguageAndScriptCode')
    message_header: MessageHeader | None = xml_element('MessageHeader', MessageHeader)
    catalog_item: list[CatalogItem] = xml_element('CatalogItem', CatalogItem, repeated=True)
