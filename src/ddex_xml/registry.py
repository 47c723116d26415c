# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Type registry: (family, version, root element) -> message type.

The registry is built once, by scanning the compiled-in schema packages,
and is read-only afterwards. It is an explicit object rather than module
state, so callers pass it where it is needed and tests can build registries
holding only a subset of types::

    >>> registry = build_registry()
    >>> registry.lookup_by_root_element('ern', '432', 'NewReleaseMessage')
    <class 'ddex_xml.schemas.ern.v432.NewReleaseMessage'>
    >>> registry.is_registered('ern', '999')
    False
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType, ModuleType

from genro_toolbox import smartsplit

from .enums import XmlEnum, find_enums
from .exceptions import NotRegistered, UnknownMessage
from .message import Message, RootMessage
from .namespaces import NamespaceInfo, normalize_version, resolve_namespace
from .schemas import DEFAULT_PACKAGES

logger = logging.getLogger(__name__)

# Only these types are document roots; other *Message types are nested.
ROOT_MESSAGES: frozenset[str] = frozenset({
    'NewReleaseMessage',
    'PurgeReleaseMessage',
    'CatalogListMessage',
    'MeadMessage',
    'PieMessage',
    'PieRequestMessage',
})


@dataclass(frozen=True)
class TypeDescriptor:
    """Registry entry of one root message type."""

    root_element: str
    namespace: str
    handle: type[RootMessage]
    factory: Callable[[], RootMessage]


@dataclass(frozen=True)
class SchemaPackage:
    """What a scan of one schema package found."""

    module_name: str
    family: str
    version: str
    namespace_info: NamespaceInfo
    messages: tuple[type[Message], ...]
    enums: tuple[type[XmlEnum], ...]

    @property
    def root_messages(self) -> tuple[type[RootMessage], ...]:
        return tuple(m for m in self.messages
                     if issubclass(m, RootMessage) and m.__name__ in ROOT_MESSAGES)


def registry_key(family: str, version: str, root_element: str) -> str:
    return f'{family}/{version}/{root_element}'


def split_key(key: str) -> tuple[str, str, str]:
    """'ern/432/NewReleaseMessage' -> ('ern', '432', 'NewReleaseMessage')."""
    family, version, root_element = smartsplit(key, '/')
    return family, version, root_element


def package_identity(module_name: str) -> tuple[str, str] | None:
    """Family and version of a schema package from its dotted path.

    'ddex_xml.schemas.ern.v432' -> ('ern', '432'); None if the path does
    not follow the ``<family>.v<version>`` convention.
    """
    parts = [p for p in smartsplit(module_name, '.') if p]
    if len(parts) < 2:
        return None
    family, version = parts[-2], parts[-1]
    if not version.startswith('v') or len(version) < 2:
        return None
    return family, normalize_version(version)


def scan_package(module: ModuleType | str) -> SchemaPackage | None:
    """Collect message types and enums of a schema package module.

    Returns None when the module is not a recognized schema package.
    """
    if isinstance(module, str):
        module = importlib.import_module(module)
    identity = package_identity(module.__name__)
    if identity is None:
        return None
    family, version = identity
    namespace_info = getattr(module, 'NAMESPACE_INFO', None) or resolve_namespace(family, version)
    if namespace_info is None:
        return None
    messages = tuple(
        value for value in vars(module).values()
        if isinstance(value, type) and issubclass(value, Message)
        and value.__module__ == module.__name__
    )
    return SchemaPackage(
        module_name=module.__name__,
        family=family,
        version=version,
        namespace_info=namespace_info,
        messages=messages,
        enums=tuple(find_enums(module)),
    )


class TypeRegistry:
    """Immutable mapping 'family/version/root' -> TypeDescriptor."""

    def __init__(
        self,
        entries: Mapping[str, TypeDescriptor],
        packages: Iterable[SchemaPackage] = (),
    ):
        self._entries = MappingProxyType(dict(entries))
        self._packages = tuple(packages)

    def __repr__(self) -> str:
        return f"TypeRegistry({len(self._entries)} message types)"

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    @property
    def packages(self) -> tuple[SchemaPackage, ...]:
        return self._packages

    def items(self) -> Iterator[tuple[str, TypeDescriptor]]:
        return iter(self._entries.items())

    def descriptor(self, family: str, version: str, root_element: str) -> TypeDescriptor:
        """Descriptor of an exact triple.

        Raises:
            UnknownMessage: If the triple is not registered.
        """
        info = self._entries.get(registry_key(family, version, root_element))
        if info is None:
            raise UnknownMessage(family, version, root_element)
        return info

    def lookup(self, family: str, version: str) -> type[RootMessage]:
        """Type of a family/version.

        When a family/version has several root messages, the one with the
        lexicographically smallest root element name is returned; use
        lookup_by_root_element to choose.

        Raises:
            NotRegistered: If no type is registered for family/version.
        """
        prefix = f'{family}/{version}/'
        keys = sorted(k for k in self._entries if k.startswith(prefix))
        if not keys:
            raise NotRegistered(family, version)
        if len(keys) > 1:
            logger.debug("%s/%s has %d root messages, using %s", family, version, len(keys), keys[0])
        return self._entries[keys[0]].handle

    def lookup_by_root_element(self, family: str, version: str, root_element: str) -> type[RootMessage]:
        """Type of an exact family/version/root triple.

        Raises:
            UnknownMessage: If the triple is not registered.
        """
        return self.descriptor(family, version, root_element).handle

    def is_registered(self, family: str, version: str) -> bool:
        prefix = f'{family}/{version}/'
        return any(k.startswith(prefix) for k in self._entries)

    def list_registered(self) -> list[str]:
        """All registry keys (order unspecified)."""
        return list(self._entries)

    def descriptors(self) -> list[TypeDescriptor]:
        """All descriptors, sorted by registry key."""
        return [self._entries[key] for key in sorted(self._entries)]

    def find(self, root_element: str, namespace: str) -> tuple[str, str, str] | None:
        """Triple whose root element and namespace match, None if none does."""
        for key in sorted(self._entries):
            info = self._entries[key]
            if info.root_element == root_element and info.namespace == namespace:
                return split_key(key)
        return None

    def new(self, family: str, version: str, root_element: str | None = None) -> RootMessage:
        """Zero-value instance of a registered type."""
        if root_element is None:
            return self.lookup(family, version)()
        return self.descriptor(family, version, root_element).factory()


def build_registry(packages: Iterable[ModuleType | str] = DEFAULT_PACKAGES) -> TypeRegistry:
    """Scan schema packages and build the registry.

    Args:
        packages: Schema package modules or their dotted names.

    Returns:
        A read-only TypeRegistry.
    """
    entries: dict[str, TypeDescriptor] = {}
    scanned = []
    for module in packages:
        package = scan_package(module)
        if package is None:
            name = module if isinstance(module, str) else module.__name__
            logger.debug("skipping %s: not a DDEX schema package", name)
            continue
        scanned.append(package)
        for message_type in package.root_messages:
            key = registry_key(package.family, package.version, message_type.ROOT_ELEMENT)
            entries[key] = TypeDescriptor(
                root_element=message_type.ROOT_ELEMENT,
                namespace=package.namespace_info.namespace,
                handle=message_type,
                factory=message_type,
            )
        logger.debug("registered %s (%d root messages, %d enums)",
                     package.module_name, len(package.root_messages), len(package.enums))
    return TypeRegistry(entries, scanned)
