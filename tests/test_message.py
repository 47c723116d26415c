# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for message module: typed codec and namespace side channel."""

from decimal import Decimal
from pathlib import Path

import pytest

from ddex_xml.exceptions import DecodeError, EncodeError, MalformedXML
from ddex_xml.message import capture_side_channel
from ddex_xml.namespaces import NAMESPACE_XSI as XSI
from ddex_xml.schemas.ern import v383, v432
from ddex_xml.schemas.mead.v11 import MeadMessage
from ddex_xml.schemas.pie.v10 import PieMessage, PieRequestMessage
from ddex_xml.xml_tree import XmlTreeParser

DATA_DIR = Path(__file__).parent / 'data'
ERN_432 = 'http://ddex.net/xml/ern/432'

SCHEMA_LOCATION = f'{ERN_432} release.xsd'


def _strip_side_channel(message):
    """Field values of a message, side channel excluded."""
    data = dict(vars(message))
    data.pop('namespace_attrs', None)
    return data


# =============================================================================
# Decode
# =============================================================================


class TestDecode:

    def test_side_channel_captured(self, ern432_minimal):
        msg = v432.NewReleaseMessage.decode(ern432_minimal)
        assert msg.namespace_attrs == {
            'xmlns:ern': ERN_432,
            'xmlns:xsi': XSI,
            'xsi:schemaLocation': SCHEMA_LOCATION,
        }
        assert msg.message_header.message_id == 'M1'

    def test_typed_attributes_not_in_side_channel(self):
        msg = v432.NewReleaseMessage.decode(
            f'<NewReleaseMessage xmlns="{ERN_432}" AvsVersionId="4" LanguageAndScriptCode="en"/>')
        assert msg.avs_version_id == '4'
        assert msg.language_and_script_code == 'en'
        assert msg.namespace_attrs == {'xmlns': ERN_432}

    def test_schema_location_under_other_prefix(self):
        """schemaLocation is recognized by namespace, not by prefix."""
        msg = v432.NewReleaseMessage.decode(
            f'<NewReleaseMessage xmlns="{ERN_432}" xmlns:i="{XSI}" i:schemaLocation="loc"/>')
        assert msg.namespace_attrs['xsi:schemaLocation'] == 'loc'
        assert msg.namespace_attrs['xmlns:i'] == XSI

    def test_foreign_schema_location_ignored(self):
        msg = v432.NewReleaseMessage.decode(
            f'<NewReleaseMessage xmlns="{ERN_432}" xmlns:o="urn:other" o:schemaLocation="x"/>')
        assert 'xsi:schemaLocation' not in msg.namespace_attrs

    def test_full_sample(self):
        data = (DATA_DIR / 'ern' / '432' / 'audio_album.xml').read_bytes()
        msg = v432.NewReleaseMessage.decode(data)

        assert msg.release_profile_version_id == 'Audio'
        header = msg.message_header
        assert [r.party_name.full_name for r in header.message_recipient] == ['First Store', 'Second Store']

        recordings = msg.resource_list.sound_recording
        assert [r.resource_reference for r in recordings] == ['A1', 'A2']
        assert recordings[0].sound_recording_edition.p_line_year == 2024
        assert recordings[0].display_artist[0].sequence_number == 1

        release = msg.release_list.release
        assert release.is_main_release is True
        assert release.original_release_date == '2024-04-05'
        assert release.display_title_text[0].value == 'Sample Album'
        assert release.display_title_text[0].is_default is True
        assert release.release_id.proprietary_id[0].namespace == 'DPID:PADPIDA2014120301U'
        assert len(release.resource_group.resource_group_content_item) == 2

        terms = msg.deal_list.release_deal[0].deal[0].deal_terms
        assert terms.price_per_unit.amount == Decimal('9.99')
        assert terms.price_per_unit.currency_code == 'USD'
        assert terms.validity_period[0].start_date == '2024-04-05'

    @pytest.mark.parametrize('value', ['2024', '2024-04', '2024-04-05Z', '2024-04-05+01:00'])
    def test_partial_and_zoned_dates_kept_verbatim(self, value):
        xml = (f'<NewReleaseMessage xmlns="{ERN_432}"><ReleaseList><Release>'
               f'<ReleaseReference>R0</ReleaseReference>'
               f'<OriginalReleaseDate>{value}</OriginalReleaseDate>'
               f'</Release></ReleaseList></NewReleaseMessage>')
        msg = v432.NewReleaseMessage.decode(xml)
        assert msg.release_list.release.original_release_date == value
        root = XmlTreeParser.parse(msg.encode())
        release = root.child_elements('ReleaseList')[0].child_elements('Release')[0]
        assert release.child_elements('OriginalReleaseDate')[0].text == value

    def test_wrong_root_element(self):
        with pytest.raises(DecodeError) as exc_info:
            v432.NewReleaseMessage.decode(f'<PurgeReleaseMessage xmlns="{ERN_432}"/>')
        assert exc_info.value.stage == 'decode'
        assert exc_info.value.message_name == 'NewReleaseMessage'

    def test_missing_required_element(self):
        with pytest.raises(DecodeError) as exc_info:
            v432.NewReleaseMessage.decode(
                f'<NewReleaseMessage xmlns="{ERN_432}"><MessageHeader/></NewReleaseMessage>')
        assert exc_info.value.path == '/NewReleaseMessage/MessageHeader'
        assert 'MessageId' in str(exc_info.value)

    def test_bad_scalar_reports_path(self):
        xml = (f'<NewReleaseMessage xmlns="{ERN_432}"><ResourceList>'
               '<SoundRecording><ResourceReference>A1</ResourceReference></SoundRecording>'
               '<SoundRecording><ResourceReference>A2</ResourceReference>'
               '<SoundRecordingEdition><PLineYear>soon</PLineYear></SoundRecordingEdition>'
               '</SoundRecording></ResourceList></NewReleaseMessage>')
        with pytest.raises(DecodeError) as exc_info:
            v432.NewReleaseMessage.decode(xml)
        assert exc_info.value.path == (
            '/NewReleaseMessage/ResourceList/SoundRecording[2]/SoundRecordingEdition/PLineYear')

    def test_malformed(self):
        with pytest.raises(MalformedXML):
            v432.NewReleaseMessage.decode(b'<NewReleaseMessage')

    def test_decode_resets_side_channel(self, ern432_minimal):
        msg = v432.NewReleaseMessage(namespace_attrs={'xmlns:old': 'urn:old'})
        msg.decode_element(XmlTreeParser.parse(ern432_minimal))
        assert 'xmlns:old' not in msg.namespace_attrs


# =============================================================================
# Encode
# =============================================================================


class TestEncode:

    def test_schema_location_survives_round_trip(self, ern432_minimal):
        encoded = v432.NewReleaseMessage.decode(ern432_minimal).encode()
        root = XmlTreeParser.parse(encoded)
        assert root.tag == 'ern:NewReleaseMessage'
        assert root.namespace == ERN_432
        assert root.attrs['xsi:schemaLocation'] == SCHEMA_LOCATION
        assert root.attrs['xmlns:xsi'] == XSI

    def test_schema_location_from_other_prefix_gets_xsi_binding(self):
        msg = v432.NewReleaseMessage.decode(
            f'<NewReleaseMessage xmlns="{ERN_432}" xmlns:i="{XSI}" i:schemaLocation="loc"/>')
        root = XmlTreeParser.parse(msg.encode())
        assert root.attrs['xmlns:i'] == XSI
        assert root.attrs['xmlns:xsi'] == XSI
        assert root.attr_namespace('xsi:schemaLocation') == XSI
        assert root.attrs['xsi:schemaLocation'] == 'loc'

    def test_fresh_message_uses_default_namespace(self):
        msg = PieRequestMessage(request_reason='Enrichment')
        encoded = msg.encode()
        assert encoded == (
            b'<PieRequestMessage xmlns="http://ddex.net/xml/pie/10">'
            b'<RequestReason>Enrichment</RequestReason></PieRequestMessage>')
        assert msg.namespace_attrs == {}

    def test_prefix_taken_from_side_channel(self):
        msg = v383.NewReleaseMessage(namespace_attrs={'xmlns:ernm': 'http://ddex.net/xml/ern/383'})
        root = XmlTreeParser.parse(msg.encode())
        assert root.tag == 'ernm:NewReleaseMessage'
        assert 'xmlns' not in root.attrs

    def test_default_declaration_preferred(self):
        msg = MeadMessage(namespace_attrs={
            'xmlns:m': 'http://ddex.net/xml/mead/11',
            'xmlns': 'http://ddex.net/xml/mead/11',
        })
        root = XmlTreeParser.parse(msg.encode())
        assert root.tag == 'MeadMessage'
        assert root.namespace == 'http://ddex.net/xml/mead/11'

    def test_foreign_default_namespace_replaced(self):
        """The element always carries its own namespace."""
        msg = PieMessage(namespace_attrs={'xmlns': 'urn:wrong'})
        root = XmlTreeParser.parse(msg.encode())
        assert root.namespace == 'http://ddex.net/xml/pie/10'

    def test_typed_field_shadows_side_channel(self):
        msg = v432.NewReleaseMessage(
            avs_version_id='5',
            namespace_attrs={'xmlns': ERN_432, 'AvsVersionId': '4'},
        )
        root = XmlTreeParser.parse(msg.encode())
        assert root.attrs['AvsVersionId'] == '5'

    def test_shadowed_key_not_restored_when_field_empty(self):
        msg = v432.NewReleaseMessage(namespace_attrs={'xmlns': ERN_432, 'AvsVersionId': '4'})
        root = XmlTreeParser.parse(msg.encode())
        assert 'AvsVersionId' not in root.attrs
        assert msg.effective_namespace_attrs() == {'xmlns': ERN_432}

    def test_typed_values_written(self):
        msg = v432.NewReleaseMessage.decode((DATA_DIR / 'ern' / '432' / 'audio_album.xml').read_bytes())
        msg.release_list.release.is_main_release = False
        root = XmlTreeParser.parse(msg.encode(pretty=True, xml_declaration=True))
        release = root.child_elements('ReleaseList')[0].child_elements('Release')[0]
        assert release.attrs['IsMainRelease'] == 'false'
        assert release.child_elements('OriginalReleaseDate')[0].text == '2024-04-05'

    def test_missing_required_element(self):
        msg = v383.CatalogListMessage(catalog_item=[v383.CatalogItem()])
        with pytest.raises(EncodeError) as exc_info:
            msg.encode()
        assert exc_info.value.stage == 'encode'
        assert exc_info.value.path == '/CatalogListMessage/CatalogItem'

    def test_repeated_field_needs_list(self):
        msg = v383.CatalogListMessage(catalog_item=v383.CatalogItem())
        with pytest.raises(EncodeError):
            msg.encode()


# =============================================================================
# Round-trip properties
# =============================================================================


class TestRoundTrip:

    @pytest.mark.parametrize('message_type,relpath', [
        (v432.NewReleaseMessage, 'ern/432/audio_album.xml'),
        (v432.PurgeReleaseMessage, 'ern/432/purge_release.xml'),
        (v383.NewReleaseMessage, 'ern/383/new_release.xml'),
        (v383.CatalogListMessage, 'ern/383/catalog_list.xml'),
        (MeadMessage, 'mead/11/moods.xml'),
        (PieMessage, 'pie/10/party_awards.xml'),
    ])
    def test_idempotent(self, message_type, relpath):
        """decode(encode(m)) equals m, side channel compared after shadowing."""
        first = message_type.decode((DATA_DIR / relpath).read_bytes())
        second = message_type.decode(first.encode())
        assert _strip_side_channel(second) == _strip_side_channel(first)
        assert second.effective_namespace_attrs() == first.effective_namespace_attrs()

    def test_namespace_attributes_preserved(self):
        data = (DATA_DIR / 'ern' / '383' / 'new_release.xml').read_bytes()
        original = XmlTreeParser.parse(data)
        encoded = XmlTreeParser.parse(v383.NewReleaseMessage.decode(data).encode())
        expected = capture_side_channel(original)
        assert {k: encoded.attrs.get(k) for k in expected} == expected
