# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Round-trip oracle.

Compares an original document with its round-tripped rendition, element by
element, and reports the differences as data. Content mismatches never
raise: a whole corpus can be scored without stopping at the first imperfect
round trip.

Comparison rules:
    - Children are grouped by local name and compared pairwise in document
      order; the n-th sibling of a group (n > 1) gets the path suffix ``[n]``.
    - An element present on one side only is recorded as missing (absent
      from the round trip) or extra (absent from the original), and its
      subtree is not visited.
    - Attributes are matched by local name; namespace declarations are
      ignored. Values are compared after normalize_value().
    - Leaf text is compared only when the original text is not empty after
      normalization.

Example:
    >>> comparison = validate_round_trip(xml_bytes, sniffer.round_trip)
    >>> comparison.success
    True
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .exceptions import DdexError
from .xml_tree import XmlElement, XmlTreeParser, split_qname

logger = logging.getLogger(__name__)

Pipeline = Callable[[bytes], bytes]


@dataclass
class DOMComparison:
    """Result of comparing an original document with its round trip."""

    elements_original: int = 0
    elements_marshaled: int = 0
    attributes_original: int = 0
    attributes_marshaled: int = 0
    missing_elements: list[str] = field(default_factory=list)
    missing_attributes: list[str] = field(default_factory=list)
    value_mismatches: list[str] = field(default_factory=list)
    extra_elements: list[str] = field(default_factory=list)
    marshaled_parseable: bool = True
    success: bool = True
    errors: list[str] = field(default_factory=list)

    def fail(self, reason: str) -> DOMComparison:
        self.success = False
        self.errors.append(reason)
        return self

    def evaluate(self) -> bool:
        """Recompute success from the collected differences.

        Extra elements are reported but never fail the comparison.
        """
        self.success = not (
            self.errors
            or self.missing_elements
            or self.missing_attributes
            or self.value_mismatches
            or not self.marshaled_parseable
        )
        return self.success

    def summary_lines(self, limit: int = 5) -> list[str]:
        """Human readable report, at most ``limit`` entries per category."""
        lines = [
            f"elements: original={self.elements_original}, marshaled={self.elements_marshaled}",
            f"attributes: original={self.attributes_original}, marshaled={self.attributes_marshaled}",
        ]
        for label, entries in (
            ('missing elements', self.missing_elements),
            ('missing attributes', self.missing_attributes),
            ('value mismatches', self.value_mismatches),
            ('extra elements', self.extra_elements),
            ('errors', self.errors),
        ):
            if not entries:
                continue
            lines.append(f"{label}: {len(entries)}")
            lines.extend(f"  - {entry}" for entry in entries[:limit])
            if len(entries) > limit:
                lines.append(f"  ... and {len(entries) - limit} more")
        if not self.marshaled_parseable:
            lines.append('CRITICAL: round-tripped document is not parseable')
        lines.append('success' if self.success else 'failure')
        return lines


def normalize_value(value: str | None) -> str:
    """Trim, unify line endings and collapse whitespace runs to one space."""
    if not value:
        return ''
    return ' '.join(value.replace('\r\n', '\n').split())


def _compared_attributes(element: XmlElement) -> dict[str, str]:
    return {
        split_qname(qname)[1]: value
        for qname, value in element.attrs.items()
        if not qname.startswith('xmlns')
    }


def _group_by_local(children: list[XmlElement]) -> dict[str, list[XmlElement]]:
    grouped: dict[str, list[XmlElement]] = {}
    for child in children:
        grouped.setdefault(child.local, []).append(child)
    return grouped


def compare_trees(
    original: XmlElement | None,
    marshaled: XmlElement | None,
    path: str,
    comparison: DOMComparison,
    position: int = 1,
) -> None:
    """Walk two trees in lock-step, recording differences in comparison.

    path is the parent path; position is the 1-based index of the element
    among its same-name siblings.
    """
    if original is None and marshaled is None:
        return
    current = f'{path}/{(original or marshaled).local}'
    if position > 1:
        current = f'{current}[{position}]'
    if original is None:
        comparison.extra_elements.append(current)
        return
    if marshaled is None:
        comparison.missing_elements.append(current)
        return

    comparison.elements_original += 1
    comparison.elements_marshaled += 1
    comparison.attributes_original += len(original.attrs)
    comparison.attributes_marshaled += len(marshaled.attrs)

    marshaled_attrs = _compared_attributes(marshaled)
    for key, value in _compared_attributes(original).items():
        if key not in marshaled_attrs:
            comparison.missing_attributes.append(f'{current}@{key}')
        elif normalize_value(value) != normalize_value(marshaled_attrs[key]):
            comparison.value_mismatches.append(
                f"{current}@{key}: '{value}' != '{marshaled_attrs[key]}'")

    if not original.children and not marshaled.children:
        original_text = normalize_value(original.text)
        marshaled_text = normalize_value(marshaled.text)
        if original_text and original_text != marshaled_text:
            comparison.value_mismatches.append(
                f"{current}: '{original_text}' != '{marshaled_text}'")

    original_groups = _group_by_local(original.children)
    marshaled_groups = _group_by_local(marshaled.children)
    tags = list(original_groups)
    tags.extend(tag for tag in marshaled_groups if tag not in original_groups)
    for tag in tags:
        original_list = original_groups.get(tag, [])
        marshaled_list = marshaled_groups.get(tag, [])
        for idx in range(max(len(original_list), len(marshaled_list))):
            compare_trees(
                original_list[idx] if idx < len(original_list) else None,
                marshaled_list[idx] if idx < len(marshaled_list) else None,
                current,
                comparison,
                idx + 1,
            )


def compare_documents(
    original: bytes,
    round_tripped: bytes,
    reparse: Pipeline | None = None,
) -> DOMComparison:
    """Compare two serialized documents.

    Args:
        original: The source document.
        round_tripped: Its decode -> encode rendition.
        reparse: Decode path used to produce round_tripped; when given it
            is run on round_tripped and a failure marks the result as not
            parseable.
    """
    comparison = DOMComparison()
    try:
        original_root = XmlTreeParser.parse(original)
    except DdexError as e:
        return comparison.fail(f'original document: {e}')
    try:
        marshaled_root = XmlTreeParser.parse(round_tripped)
    except DdexError as e:
        comparison.marshaled_parseable = False
        return comparison.fail(f'round-tripped document: {e}')

    if original_root.local == marshaled_root.local:
        compare_trees(original_root, marshaled_root, '', comparison)
    else:
        comparison.missing_elements.append(f'/{original_root.local}')
        comparison.extra_elements.append(f'/{marshaled_root.local}')

    if reparse is not None:
        try:
            reparse(round_tripped)
        except DdexError as e:
            comparison.marshaled_parseable = False
            logger.warning("round-tripped document does not parse back: %s", e)
    comparison.evaluate()
    return comparison


def validate_round_trip(original: bytes, pipeline: Pipeline) -> DOMComparison:
    """Run pipeline on original, compare, and check its output parses back.

    Pipeline errors on the original are reported in the result.
    """
    try:
        round_tripped = pipeline(original)
    except DdexError as e:
        logger.debug("round trip failed: %s", e)
        return DOMComparison().fail(f'round trip: {e}')
    return compare_documents(original, round_tripped, reparse=pipeline)


# =============================================================================
# FIELD COVERAGE
# =============================================================================


@dataclass
class CoverageReport:
    """Share of original element and attribute paths kept by a round trip."""

    total: int
    covered: int
    uncovered: list[str]

    @property
    def percentage(self) -> float:
        return 100.0 * self.covered / self.total if self.total else 100.0

    @property
    def complete(self) -> bool:
        return not self.uncovered


def collect_paths(element: XmlElement | None, parent_path: str = '') -> list[str]:
    """Element and attribute paths of a tree, in document order.

    Attribute paths look like ``/Root/Child@Name``; namespace declarations
    are not included. Repeated siblings yield the same path.
    """
    if element is None:
        return []
    current = f'{parent_path}/{element.local}'
    paths = [current]
    paths.extend(
        f'{current}@{split_qname(qname)[1]}'
        for qname in element.attrs
        if not qname.startswith('xmlns')
    )
    for child in element.children:
        paths.extend(collect_paths(child, current))
    return paths


def field_coverage(original: bytes, round_tripped: bytes) -> CoverageReport:
    """Which distinct paths of original also appear in round_tripped.

    Raises:
        MalformedXML: If either document is not well-formed.
    """
    original_paths = sorted(set(collect_paths(XmlTreeParser.parse(original))))
    marshaled_paths = set(collect_paths(XmlTreeParser.parse(round_tripped)))
    uncovered = [p for p in original_paths if p not in marshaled_paths]
    return CoverageReport(
        total=len(original_paths),
        covered=len(original_paths) - len(uncovered),
        uncovered=uncovered,
    )
