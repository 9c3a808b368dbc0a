"""Tests for the provider registry and the configuration cache."""

import threading

import pytest

from multiconf.cache import ConfigurationCache
from multiconf.exceptions import ConfigurationArgumentError
from multiconf.loader import (
    JsonConfigurationProvider,
    MemoryConfigurationProvider,
    YamlConfigurationProvider,
)
from multiconf.registry import ProviderRegistry


class CatchAllProvider(MemoryConfigurationProvider):
    """Provider that claims every source."""

    def can_handle(self, source):
        return True


class TestProviderRegistry:
    """Test cases for ProviderRegistry."""

    def setup_method(self):
        """Set up test fixtures."""
        self.registry = ProviderRegistry()

    def test_register_in_order(self):
        """Test providers keep registration order."""
        assert self.registry.register(JsonConfigurationProvider())
        assert self.registry.register(YamlConfigurationProvider())
        assert self.registry.names == ["JSON", "YAML"]
        assert len(self.registry) == 2

    def test_duplicate_names_are_ignored(self):
        """Test case-insensitive duplicate names are a silent no-op."""
        first = MemoryConfigurationProvider(name="Custom")
        second = MemoryConfigurationProvider(name="CUSTOM", scheme="other://")

        assert self.registry.register(first)
        assert not self.registry.register(second)
        assert self.registry.names == ["Custom"]
        assert self.registry.get("custom") is first
        assert "cUsToM" in self.registry

    def test_invalid_providers(self):
        """Test None and objects without the provider interface."""
        with pytest.raises(ConfigurationArgumentError):
            self.registry.register(None)
        with pytest.raises(ConfigurationArgumentError):
            self.registry.register(object())

    def test_find_first_match(self):
        """Test the first matching provider wins over a later one."""
        json_provider = JsonConfigurationProvider()
        catch_all = CatchAllProvider(name="ALL")
        self.registry.register(json_provider)
        self.registry.register(catch_all)

        assert self.registry.find_provider("a.json") is json_provider
        assert self.registry.find_provider("a.ini") is catch_all

    def test_registration_order_beats_specificity(self):
        """Test a catch-all registered first shadows specific providers."""
        catch_all = CatchAllProvider(name="ALL")
        self.registry.register(catch_all)
        self.registry.register(JsonConfigurationProvider())

        assert self.registry.find_provider("a.json") is catch_all

    def test_no_match(self):
        """Test lookups without a match return None."""
        self.registry.register(JsonConfigurationProvider())
        assert self.registry.find_provider("data.ini") is None


class TestConfigurationCache:
    """Test cases for ConfigurationCache."""

    def setup_method(self):
        """Set up test fixtures."""
        self.cache = ConfigurationCache()

    def test_merge_last_writer_wins(self):
        """Test merges overwrite colliding keys and keep the rest."""
        self.cache.merge({"a": 1, "b": 2})
        size = self.cache.merge({"b": 3, "c": 4})

        assert size == 3
        assert self.cache.snapshot() == {"a": 1, "b": 3, "c": 4}

    def test_lookup_distinguishes_stored_none(self):
        """Test a stored None is found."""
        self.cache.set("nothing", None)
        assert self.cache.lookup("nothing") == (True, None)
        assert self.cache.lookup("absent") == (False, None)

    def test_snapshot_is_a_copy(self):
        """Test snapshots do not alias the cache."""
        self.cache.set("a", 1)
        snapshot = self.cache.snapshot()
        snapshot["a"] = 2
        assert self.cache.lookup("a") == (True, 1)

    def test_snapshot_prefix(self):
        """Test prefix filtering."""
        self.cache.merge({"db.host": "h", "db.port": 1, "app.name": "x"})
        assert self.cache.snapshot("db.") == {"db.host": "h", "db.port": 1}

    def test_clear(self):
        """Test clearing removes everything."""
        self.cache.merge({"a": 1})
        self.cache.clear()
        assert len(self.cache) == 0
        assert not self.cache.contains("a")
        assert self.cache.keys() == []

    def test_concurrent_merges(self):
        """Test merges from many threads all land."""

        def worker(n):
            self.cache.merge({f"key{n}.{i}": i for i in range(100)})

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(self.cache) == 800
