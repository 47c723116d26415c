# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Nested types of the ERN 4.x release notification standard (4.3, 4.3.2)."""

from __future__ import annotations

from dataclasses import dataclass

from ...enums import XmlEnum
from ...fields import xml_attr, xml_element, xml_text
from ...message import Message
from .._common import PartyName, Price, ProprietaryId, ReleaseId, ValidityPeriod


class ReleaseType(XmlEnum):
    RELEASE_TYPE_UNSPECIFIED = 0
    RELEASE_TYPE_ALBUM = 1
    RELEASE_TYPE_SINGLE = 2
    RELEASE_TYPE_EP = 3
    RELEASE_TYPE_TRACK_RELEASE = 4
    RELEASE_TYPE_VIDEO_SINGLE = 5


@dataclass
class Party(Message):
    party_reference: str | None = xml_element('PartyReference', required=True)
    party_id: list[ProprietaryId] = xml_element('PartyId', ProprietaryId, repeated=True)
    party_name: list[PartyName] = xml_element('PartyName', PartyName, repeated=True)


@dataclass
class PartyList(Message):
    party: list[Party] = xml_element('Party', Party, repeated=True)


@dataclass
class DisplayArtist(Message):
    sequence_number: int | None = xml_attr('SequenceNumber', int)
    artist_party_reference: str | None = xml_element('ArtistPartyReference')
    display_artist_role: str | None = xml_element('DisplayArtistRole')


@dataclass
class DisplayTitleText(Message):
    language_and_script_code: str | None = xml_attr('LanguageAndScriptCode')
    is_default: bool | None = xml_attr('IsDefault', bool)
    value: str | None = xml_text()


@dataclass
class SoundRecordingEdition(Message):
    isrc: list[str] = xml_element('ISRC', repeated=True)
    p_line_year: int | None = xml_element('PLineYear', int)


@dataclass
class SoundRecording(Message):
    resource_reference: str | None = xml_element('ResourceReference', required=True)
    type: str | None = xml_element('Type')
    sound_recording_edition: SoundRecordingEdition | None = xml_element(
        'SoundRecordingEdition', SoundRecordingEdition)
    display_title_text: list[str] = xml_element('DisplayTitleText', repeated=True)
    display_artist_name: list[str] = xml_element('DisplayArtistName', repeated=True)
    display_artist: list[DisplayArtist] = xml_element('DisplayArtist', DisplayArtist, repeated=True)
    duration: str | None = xml_element('Duration')
    parental_warning_type: list[str] = xml_element('ParentalWarningType', repeated=True)


@dataclass
class ResourceList(Message):
    sound_recording: list[SoundRecording] = xml_element(
        'SoundRecording', SoundRecording, repeated=True)


@dataclass
class ResourceGroupContentItem(Message):
    sequence_number: int | None = xml_element('SequenceNumber', int)
    release_resource_reference: str | None = xml_element('ReleaseResourceReference')


@dataclass
class ResourceGroup(Message):
    sequence_number: int | None = xml_element('SequenceNumber', int)
    resource_group_content_item: list[ResourceGroupContentItem] = xml_element(
        'ResourceGroupContentItem', ResourceGroupContentItem, repeated=True)


@dataclass
class Release(Message):
    is_main_release: bool | None = xml_attr('IsMainRelease', bool)
    release_reference: str | None = xml_element('ReleaseReference', required=True)
    release_type: list[str] = xml_element('ReleaseType', repeated=True)
    release_id: ReleaseId | None = xml_element('ReleaseId', ReleaseId)
    display_title_text: list[DisplayTitleText] = xml_element(
        'DisplayTitleText', DisplayTitleText, repeated=True)
    display_artist_name: list[str] = xml_element('DisplayArtistName', repeated=True)
    display_artist: list[DisplayArtist] = xml_element('DisplayArtist', DisplayArtist, repeated=True)
    duration: str | None = xml_element('Duration')
    original_release_date: str | None = xml_element('OriginalReleaseDate')
    parental_warning_type: list[str] = xml_element('ParentalWarningType', repeated=True)
    resource_group: ResourceGroup | None = xml_element('ResourceGroup', ResourceGroup)


@dataclass
class TrackRelease(Message):
    release_reference: str | None = xml_element('ReleaseReference', required=True)
    release_id: ReleaseId | None = xml_element('ReleaseId', ReleaseId)
    release_resource_reference: str | None = xml_element('ReleaseResourceReference')
    release_label_reference: list[str] = xml_element('ReleaseLabelReference', repeated=True)


@dataclass
class ReleaseList(Message):
    release: Release | None = xml_element('Release', Release)
    track_release: list[TrackRelease] = xml_element('TrackRelease', TrackRelease, repeated=True)


@dataclass
class DealTerms(Message):
    territory_code: list[str] = xml_element('TerritoryCode', repeated=True)
    validity_period: list[ValidityPeriod] = xml_element(
        'ValidityPeriod', ValidityPeriod, repeated=True)
    commercial_model_type: list[str] = xml_element('CommercialModelType', repeated=True)
    use_type: list[str] = xml_element('UseType', repeated=True)
    price_per_unit: Price | None = xml_element('PricePerUnit', Price)


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
class PurgedRelease(Message):
    release_id: ReleaseId | None = xml_element('ReleaseId', ReleaseId)
    display_title_text: list[str] = xml_element('DisplayTitleText', repeated=True)

