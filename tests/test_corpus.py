# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Corpus-driven conformance and integrity tests."""

from pathlib import Path

import pytest

from ddex_xml.corpus import discover, load_samples, run_conformance, run_integrity

DATA_DIR = Path(__file__).parent / 'data'

CORPUS = [
    (family, version)
    for family, versions in discover(DATA_DIR).items()
    for version in versions
]


class TestDiscover:

    def test_families_and_versions(self):
        assert discover(DATA_DIR) == {
            'ern': ['383', '43', '432'],
            'mead': ['11'],
            'pie': ['10'],
        }

    def test_missing_directory(self, tmp_path):
        assert discover(tmp_path / 'nope') == {}

    def test_version_with_only_placeholders(self, tmp_path):
        version_dir = tmp_path / 'ern' / '432'
        version_dir.mkdir(parents=True)
        (version_dir / 'release_stub.xml').write_text('<a/>')
        (version_dir / 'skip_me.xml').write_text('<a/>')
        (version_dir / 'notes.txt').write_text('x')
        assert discover(tmp_path) == {}


class TestLoadSamples:

    def test_placeholders_ignored(self):
        samples = load_samples(DATA_DIR, 'ern', '432')
        assert list(samples) == ['audio_album', 'purge_release']
        assert samples['audio_album'].startswith(b'<?xml')

    def test_unknown_version(self):
        assert load_samples(DATA_DIR, 'ern', '999') == {}


@pytest.mark.parametrize('family,version', CORPUS)
def test_conformance(registry, family, version):
    """Every sample is detected as its own family/version and decodes."""
    results = run_conformance(load_samples(DATA_DIR, family, version), registry, workers=2)
    assert results
    for name, result in results.items():
        assert result.ok, f'{name}: {result.error}'
        assert (result.family, result.version) == (family, version)
        assert result.size > 0


@pytest.mark.parametrize('family,version', CORPUS)
def test_integrity(registry, family, version):
    """Every sample survives decode -> encode without losing content."""
    results = run_integrity(load_samples(DATA_DIR, family, version), registry, workers=2)
    for name, result in results.items():
        assert result.ok, f'{name}:\n' + '\n'.join(result.comparison.summary_lines())
        assert result.comparison.marshaled_parseable


def test_failures_are_reported_not_raised(registry):
    samples = {
        'good': (DATA_DIR / 'mead' / '11' / 'moods.xml').read_bytes(),
        'broken': b'<MeadMessage',
        'unknown': b'<Unknown xmlns="urn:x"/>',
    }
    conformance = run_conformance(samples, registry, workers=3)
    assert list(conformance) == ['good', 'broken', 'unknown']
    assert conformance['good'].root_element == 'MeadMessage'
    assert not conformance['broken'].ok
    assert 'Unknown DDEX message type' in conformance['unknown'].error

    integrity = run_integrity(samples, registry, workers=1)
    assert integrity['good'].ok
    assert not integrity['broken'].ok
    assert not integrity['unknown'].ok
