# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""ERN 4.3 release notification messages."""

from __future__ import annotations

from dataclasses import dataclass

from ...fields import xml_attr, xml_element
from ...message import RootMessage
from ...namespaces import resolve_namespace
from .._common import MessageHeader, ParentalWarningType, UpdateIndicator  # noqa: F401
from ._ern4 import DealList, PartyList, PurgedRelease, ReleaseList, ReleaseType, ResourceList  # noqa: F401

NAMESPACE_INFO = resolve_namespace('ern', '43')


@dataclass
class NewReleaseMessage(RootMessage):
    NAMESPACE_INFO = NAMESPACE_INFO

    release_profile_version_id: str | None = xml_attr('ReleaseProfileVersionId')
    language_and_script_code: str | None = xml_attr('LanguageAndScriptCode')
    avs_version_id: str | None = xml_attr('AvsVersionId')
    message_header: MessageHeader | None = xml_element('MessageHeader', MessageHeader)
    party_list: PartyList | None = xml_element('PartyList', PartyList)
    resource_list: ResourceList | None = xml_element('ResourceList', ResourceList)
    release_list: ReleaseList | None = xml_element('ReleaseList', ReleaseList)
    deal_list: DealList | None = xml_element('DealList', DealList)


@dataclass
class PurgeReleaseMessage(RootMessage):
    NAMESPACE_INFO = NAMESPACE_INFO

    language_and_script_code: str | None = xml_attr('LanguageAndScriptCode')
    avs_version_id: str | None = xml_attr('AvsVersionId')
    message_header: MessageHeader | None = xml_element('MessageHeader', MessageHeader)
    purged_release: PurgedRelease | None = xml_element('PurgedRelease', PurgedRelease)
