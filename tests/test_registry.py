"""Tests for the source registry."""

import pytest

from component_checker.errors import UnknownSource
from component_checker.sources import SourceRegistry
from tests.fakes import FakeSource, make_id


def test_get_registered_source() -> None:
    source = FakeSource(make_id(1))
    registry = SourceRegistry([source, FakeSource(make_id(2))])

    assert registry.get(make_id(1)) is source
    assert registry.get(str(make_id(1))) is source
    assert make_id(2) in registry


def test_get_unknown_source_raises() -> None:
    registry = SourceRegistry([FakeSource(make_id(1))])

    with pytest.raises(UnknownSource, match="unregistered source: 00000000-0000-0000-0000-000000000009"):
        registry.get(make_id(9))


def test_unknown_source_is_lookup_error() -> None:
    with pytest.raises(LookupError):
        SourceRegistry().get("not-a-uuid")


def test_duplicate_identifier_rejected() -> None:
    registry = SourceRegistry([FakeSource(make_id(1))])

    with pytest.raises(ValueError, match="already registered"):
        registry.register(FakeSource(make_id(1)))
    assert len(registry) == 1


def test_enumeration_keeps_registration_order() -> None:
    ids = [make_id(3), make_id(1), make_id(2)]
    registry = SourceRegistry([FakeSource(source_id) for source_id in ids])

    assert registry.identifiers() == ids
    assert [source.identifier for source in registry] == ids


def test_unregister() -> None:
    registry = SourceRegistry([FakeSource(make_id(1))])

    assert registry.unregister(make_id(1))
    assert not registry.unregister(make_id(1))
    assert registry.find(make_id(1)) is None
