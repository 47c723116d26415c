# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for namespaces and config modules."""

from pathlib import Path

import pytest

from ddex_xml.config import Settings
from ddex_xml.namespaces import (
    NAMESPACE_AVS,
    imports_avs,
    normalize_version,
    resolve_namespace,
)


class TestNormalizeVersion:

    @pytest.mark.parametrize('raw,expected', [
        ('432', '432'),
        ('v432', '432'),
        ('4.3.2', '432'),
        ('V4_3', '43'),
        (' 383 ', '383'),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_version(raw) == expected


class TestResolveNamespace:

    def test_ern_namespace(self, tmp_path):
        info = resolve_namespace('ern', '432', tmp_path)
        assert info.namespace == 'http://ddex.net/xml/ern/432'
        assert info.prefix == 'ern'
        assert info.schema_file == 'release-notification.xsd'
        assert info.imports_avs is False

    def test_mead_and_pie(self, tmp_path):
        assert resolve_namespace('mead', '11', tmp_path).namespace == 'http://ddex.net/xml/mead/11'
        pie = resolve_namespace('pie', 'v1.0', tmp_path)
        assert pie.namespace == 'http://ddex.net/xml/pie/10'
        assert pie.schema_file == 'party-identification-and-enrichment.xsd'

    def test_unknown_family(self, tmp_path):
        assert resolve_namespace('dsr', '30', tmp_path) is None

    def test_avs_import_detected(self, tmp_path):
        schema_dir = tmp_path / 'ernv432'
        schema_dir.mkdir()
        (schema_dir / 'release-notification.xsd').write_text(
            f'<xs:schema xmlns:avs="{NAMESPACE_AVS}"/>', encoding='utf-8')
        assert resolve_namespace('ern', '432', tmp_path).imports_avs is True


class TestImportsAvs:

    def test_missing_file(self, tmp_path):
        assert imports_avs(tmp_path / 'nope.xsd') is False

    def test_import_element(self, tmp_path):
        path = tmp_path / 'schema.xsd'
        path.write_text(f'<xs:import namespace="{NAMESPACE_AVS}" schemaLocation="avs.xsd"/>')
        assert imports_avs(path) is True

    def test_no_marker(self, tmp_path):
        path = tmp_path / 'schema.xsd'
        path.write_text('<xs:schema/>')
        assert imports_avs(path) is False


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.xsd_dir == Path('xsd')
        assert settings.corpus_dir == Path('tests/data')
        assert settings.workers >= 1

    def test_from_environment(self):
        settings = Settings.from_env({
            'DDEX_XSD_DIR': '/schemas',
            'DDEX_CORPUS_DIR': '/corpus',
            'DDEX_WORKERS': '3',
        })
        assert settings.xsd_dir == Path('/schemas')
        assert settings.corpus_dir == Path('/corpus')
        assert settings.workers == 3
