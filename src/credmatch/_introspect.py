"""Readable-property discovery for PropertyMatcher.

A property is a public name on a credential's type that can be read
without arguments:

- ``property`` objects (write-only when ``fget`` is None)
- ``functools.cached_property``
- dataclass fields, ``__slots__`` members and C-level attribute descriptors
- any other attribute descriptor that is not a method, such as
  ``NamedTuple`` fields or a user-defined descriptor
- public instance attributes, for plain classes that set them in __init__

Domain types that don't want to be introspected can publish an explicit
accessor table instead::

    class Token:
        __credential_properties__ = {
            "owner": lambda t: t.owner_id,
            "secret": None,  # write-only: never readable
        }

When present, the table is authoritative. Names starting with an
underscore are never properties.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from operator import attrgetter
from types import GetSetDescriptorType, MappingProxyType, MemberDescriptorType
from typing import Any

from credmatch._types import MatcherError

ACCESSOR_TABLE = "__credential_properties__"

_DATA_DESCRIPTORS = (functools.cached_property, MemberDescriptorType, GetSetDescriptorType)


class IntrospectionError(MatcherError):
    """A credential type could not be examined for properties."""

    def __init__(self, cls: type, reason: str) -> None:
        self.cls = cls
        self.reason = reason
        super().__init__(f"cannot introspect {cls.__qualname__}: {reason}")


@dataclass(frozen=True, slots=True)
class PropertyDescriptor:
    """A named property and its read accessor (None when write-only)."""

    name: str
    read: Callable[[Any], Any] | None = None

    @property
    def readable(self) -> bool:
        return self.read is not None


@functools.lru_cache(maxsize=512)
def property_descriptors(cls: type) -> Mapping[str, PropertyDescriptor]:
    """Return the properties of ``cls``, keyed by name.

    Results are cached per class.

    Raises:
        IntrospectionError: If the class publishes a malformed accessor table.
    """
    table = getattr(cls, ACCESSOR_TABLE, None)
    if table is not None:
        return MappingProxyType(_from_table(cls, table))
    return MappingProxyType(_from_class(cls))


def find_property(item: object, name: str) -> PropertyDescriptor | None:
    """Locate property ``name`` on ``item``, or None if it has no such property.

    Type-level properties win over instance attributes.

    Raises:
        IntrospectionError: If the item's type cannot be introspected.
    """
    cls = type(item)
    descriptor = property_descriptors(cls).get(name)
    if descriptor is not None:
        return descriptor
    if name.startswith("_") or getattr(cls, ACCESSOR_TABLE, None) is not None:
        return None
    instance_attrs = getattr(item, "__dict__", None)
    if isinstance(instance_attrs, dict) and name in instance_attrs:
        return PropertyDescriptor(name, attrgetter(name))
    return None


def _from_table(cls: type, table: object) -> dict[str, PropertyDescriptor]:
    if not isinstance(table, Mapping):
        msg = f"{ACCESSOR_TABLE} must be a mapping, got {type(table).__name__}"
        raise IntrospectionError(cls, msg)

    descriptors: dict[str, PropertyDescriptor] = {}
    for name, accessor in table.items():
        if not isinstance(name, str):
            msg = f"property names must be strings, got {type(name).__name__}"
            raise IntrospectionError(cls, msg)
        if accessor is not None and not callable(accessor):
            msg = f"accessor for {name!r} is not callable"
            raise IntrospectionError(cls, msg)
        descriptors[name] = PropertyDescriptor(name, accessor)
    return descriptors


def _from_class(cls: type) -> dict[str, PropertyDescriptor]:
    descriptors: dict[str, PropertyDescriptor] = {}
    # Walk base classes first so subclasses override.
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name.startswith("_"):
                continue
            if isinstance(attr, property):
                descriptors[name] = PropertyDescriptor(name, attr.fget)
            elif isinstance(attr, _DATA_DESCRIPTORS) or _is_attribute_descriptor(attr):
                descriptors[name] = PropertyDescriptor(name, attrgetter(name))
            else:
                # Shadowed by a method or plain class attribute.
                descriptors.pop(name, None)

    if dataclasses.is_dataclass(cls):
        for f in dataclasses.fields(cls):
            if not f.name.startswith("_"):
                descriptors[f.name] = PropertyDescriptor(f.name, attrgetter(f.name))
    return descriptors


def _is_attribute_descriptor(attr: object) -> bool:
    # Functions, staticmethods and classmethods are descriptors too.
    return hasattr(type(attr), "__get__") and not inspect.isroutine(attr)
