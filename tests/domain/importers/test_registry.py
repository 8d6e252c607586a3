from __future__ import annotations

import logging
import threading

import pytest

from hostfacts.domain.importers import (
    AnsibleFactImporter,
    FactImporter,
    ImporterRegistry,
    PuppetFactImporter,
    default_registry,
)
from tests.helpers.facts import CustomFactImporter


class ProxyFactImporter(CustomFactImporter):
    @classmethod
    def authorized_features(cls) -> frozenset[str]:
        return frozenset({"Facts", "Puppet"})


def test_resolve_returns_registered_importer() -> None:
    registry = ImporterRegistry({"puppet": PuppetFactImporter})
    registry.register("custom", CustomFactImporter)

    assert registry.resolve("custom") is CustomFactImporter
    assert registry.resolve("puppet") is PuppetFactImporter


def test_resolve_falls_back_to_default() -> None:
    registry = ImporterRegistry({"puppet": PuppetFactImporter})

    assert registry.resolve("chef") is PuppetFactImporter
    assert registry.resolve(None) is PuppetFactImporter


def test_resolve_without_default_raises() -> None:
    registry = ImporterRegistry({"ansible": AnsibleFactImporter})

    with pytest.raises(LookupError, match="chef"):
        registry.resolve("chef")


def test_keys_are_string_normalized() -> None:
    registry = ImporterRegistry()
    registry.register(" Custom ", CustomFactImporter)

    assert registry.resolve("CUSTOM") is CustomFactImporter
    assert "custom" in registry
    assert registry.keys() == ("custom",)


def test_last_registration_wins() -> None:
    registry = ImporterRegistry()
    registry.register("custom", CustomFactImporter)
    registry.register("custom", ProxyFactImporter)

    assert registry.resolve("custom") is ProxyFactImporter
    assert registry.keys() == ("custom",)


def test_register_rejects_non_importers() -> None:
    registry = ImporterRegistry()

    with pytest.raises(TypeError):
        registry.register("bogus", object)  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="fact taxonomy"):
        registry.register("abstract", FactImporter)


def test_authorized_features_are_flattened_and_deduplicated() -> None:
    registry = ImporterRegistry(
        {
            "puppet": PuppetFactImporter,
            "ansible": AnsibleFactImporter,
            "proxy": ProxyFactImporter,
            "custom": CustomFactImporter,
        }
    )

    assert registry.authorized_features() == frozenset({"Puppet", "Ansible", "Facts"})


def test_missing_authorized_features_logs_a_notice(caplog: pytest.LogCaptureFixture) -> None:
    registry = ImporterRegistry({"custom": CustomFactImporter})

    with caplog.at_level(logging.DEBUG):
        features = registry.authorized_features()

    assert features == frozenset()
    notices = [record for record in caplog.records if "does not implement" in record.getMessage()]
    assert len(notices) == 1
    assert notices[0].levelno == logging.DEBUG
    assert "CustomFactImporter" in notices[0].getMessage()


def test_supports_background_is_false_for_every_importer() -> None:
    registry = ImporterRegistry({"puppet": PuppetFactImporter, "custom": CustomFactImporter})

    assert registry.supports_background("custom") is False
    assert registry.supports_background("unknown") is False


def test_default_registry_is_shared_and_preloaded() -> None:
    registry = default_registry()

    assert registry is default_registry()
    assert registry.default_key == "puppet"
    assert registry.resolve("ansible") is AnsibleFactImporter
    assert registry.resolve("salt") is PuppetFactImporter


def test_concurrent_registration_keeps_every_key() -> None:
    registry = ImporterRegistry()

    def register(index: int) -> None:
        registry.register(f"custom-{index}", CustomFactImporter)

    threads = [threading.Thread(target=register, args=(index,)) for index in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(registry.keys()) == 20
