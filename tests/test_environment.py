"""Tests for resource_manifests.render.environment."""

from __future__ import annotations

import pytest

from resource_manifests.errors import ManifestError, MissingEnvironmentValue
from resource_manifests.render.environment import (
    EMPTY,
    PROCESS,
    ChainedEnvironment,
    DummyEnvironment,
    EmptyEnvironment,
    ProcessEnvironment,
    SimpleEnvironment,
    clear_system_property,
    get_system_property,
    set_system_property,
)


@pytest.fixture(autouse=True)
def _clean_properties():
    clear_system_property()
    yield
    clear_system_property()


# ── TestEmptyEnvironment ─────────────────────────────────────────────


class TestEmptyEnvironment:
    def test_always_raises(self):
        with pytest.raises(MissingEnvironmentValue, match="owner"):
            EmptyEnvironment().get("owner")

    def test_singleton_is_empty(self):
        assert isinstance(EMPTY, EmptyEnvironment)

    def test_error_is_a_key_error(self):
        with pytest.raises(KeyError):
            EMPTY.get("anything")

    def test_error_is_a_manifest_error(self):
        with pytest.raises(ManifestError):
            EMPTY.get("anything")


# ── TestSimpleEnvironment ────────────────────────────────────────────


class TestSimpleEnvironment:
    def test_get_known_key(self):
        env = SimpleEnvironment({"owner": "teamA"})
        assert env.get("owner") == "teamA"

    def test_get_unknown_key_raises(self):
        env = SimpleEnvironment({"owner": "teamA"})
        with pytest.raises(MissingEnvironmentValue) as excinfo:
            env.get("namespace")
        assert excinfo.value.key == "namespace"
        assert str(excinfo.value) == "No variable 'namespace' found in the environment"

    def test_empty_string_value_is_a_value(self):
        assert SimpleEnvironment({"k": ""}).get("k") == ""

    def test_with_value_does_not_mutate(self):
        base = SimpleEnvironment({"a": "1"})
        extended = base.with_value("b", "2")
        assert extended.get("b") == "2"
        assert extended.get("a") == "1"
        with pytest.raises(MissingEnvironmentValue):
            base.get("b")

    def test_with_value_overrides(self):
        env = SimpleEnvironment({"a": "1"}).with_value("a", "2")
        assert env.get("a") == "2"

    def test_source_mapping_copied(self):
        source = {"a": "1"}
        env = SimpleEnvironment(source)
        source["a"] = "changed"
        assert env.get("a") == "1"

    def test_values_are_read_only(self):
        env = SimpleEnvironment({"a": "1"})
        with pytest.raises(TypeError):
            env.values["a"] = "2"  # type: ignore[index]

    def test_from_properties_stringifies(self):
        env = SimpleEnvironment.from_properties({"partitions": 4, 1: True})
        assert env.get("partitions") == "4"
        assert env.get("1") == "True"

    def test_equality(self):
        assert SimpleEnvironment({"a": "1"}) == SimpleEnvironment({"a": "1"})
        assert SimpleEnvironment({"a": "1"}) != SimpleEnvironment({"a": "2"})


# ── TestDummyEnvironment ─────────────────────────────────────────────


class TestDummyEnvironment:
    def test_echoes_placeholder(self):
        assert DummyEnvironment().get("owner") == "{{owner}}"

    def test_never_raises(self):
        env = DummyEnvironment()
        for key in ("a", "b.c", "with-dash"):
            assert env.get(key) == "{{" + key + "}}"


# ── TestProcessEnvironment ───────────────────────────────────────────


class TestProcessEnvironment:
    def test_reads_os_environment(self, monkeypatch):
        monkeypatch.setenv("RM_TEST_OWNER", "teamA")
        assert PROCESS.get("RM_TEST_OWNER") == "teamA"

    def test_falls_back_to_system_property(self, monkeypatch):
        monkeypatch.delenv("RM_TEST_OWNER", raising=False)
        set_system_property("RM_TEST_OWNER", "teamB")
        assert PROCESS.get("RM_TEST_OWNER") == "teamB"

    def test_os_environment_wins(self, monkeypatch):
        monkeypatch.setenv("RM_TEST_OWNER", "from-env")
        set_system_property("RM_TEST_OWNER", "from-prop")
        assert PROCESS.get("RM_TEST_OWNER") == "from-env"

    def test_missing_everywhere_raises(self, monkeypatch):
        monkeypatch.delenv("RM_TEST_OWNER", raising=False)
        with pytest.raises(MissingEnvironmentValue, match="Missing system property `RM_TEST_OWNER`"):
            PROCESS.get("RM_TEST_OWNER")

    def test_injected_sources(self):
        env = ProcessEnvironment(environ={}, properties={"k": "v"})
        assert env.get("k") == "v"
        env = ProcessEnvironment(environ={"k": "os"}, properties={"k": "v"})
        assert env.get("k") == "os"

    def test_injected_sources_ignore_globals(self, monkeypatch):
        monkeypatch.setenv("RM_TEST_OWNER", "teamA")
        env = ProcessEnvironment(environ={}, properties={})
        with pytest.raises(MissingEnvironmentValue):
            env.get("RM_TEST_OWNER")


# ── TestSystemProperties ─────────────────────────────────────────────


class TestSystemProperties:
    def test_set_get_clear(self):
        set_system_property("a", "1")
        assert get_system_property("a") == "1"
        clear_system_property("a")
        assert get_system_property("a") is None

    def test_values_stringified(self):
        set_system_property("n", 3)  # type: ignore[arg-type]
        assert get_system_property("n") == "3"


# ── TestChainedEnvironment ───────────────────────────────────────────


class TestChainedEnvironment:
    def test_first_match_wins(self):
        env = ChainedEnvironment(
            SimpleEnvironment({"a": "first"}),
            SimpleEnvironment({"a": "second", "b": "2"}),
        )
        assert env.get("a") == "first"
        assert env.get("b") == "2"

    def test_last_error_propagates(self):
        env = ChainedEnvironment(EMPTY, SimpleEnvironment({"a": "1"}))
        with pytest.raises(MissingEnvironmentValue, match="zzz"):
            env.get("zzz")

    def test_passthrough_tail(self):
        env = ChainedEnvironment(SimpleEnvironment({"a": "1"}), DummyEnvironment())
        assert env.get("a") == "1"
        assert env.get("b") == "{{b}}"

    def test_requires_an_environment(self):
        with pytest.raises(ValueError):
            ChainedEnvironment()
