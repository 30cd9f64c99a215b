# Copyright 2026 SchemaKit Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the metadata registry."""

import gc
import threading

import schemakit as sk
from schemakit.core.registry import GLOBAL_REGISTRY, Registry, SchemaMeta

# ###############
# Registry
# ###############


class TestRegistry:
    def test_add_get_has_remove(self) -> None:
        registry: Registry[SchemaMeta] = Registry()
        schema = sk.string()
        assert not registry.has(schema)

        registry.add(schema, SchemaMeta(title="Name"))
        assert registry.has(schema)
        meta = registry.get(schema)
        assert meta is not None
        assert meta.title == "Name"

        registry.remove(schema)
        assert registry.get(schema) is None

    def test_keyed_by_identity(self) -> None:
        registry: Registry[str] = Registry()
        first, second = sk.string(), sk.string()
        registry.add(first, "first")
        assert registry.get(second) is None

    def test_remove_unknown_is_ignored(self) -> None:
        registry: Registry[str] = Registry()
        registry.remove(sk.string())
        assert len(registry) == 0

    def test_items(self) -> None:
        registry: Registry[str] = Registry()
        schema = sk.int_()
        registry.add(schema, "count")
        assert list(registry.items()) == [(schema, "count")]

    def test_entries_do_not_keep_schemas_alive(self) -> None:
        registry: Registry[str] = Registry()
        registry.add(sk.string(), "gone")
        gc.collect()
        assert len(registry) == 0

    def test_concurrent_writers(self) -> None:
        registry: Registry[int] = Registry()
        schemas = [sk.string() for _ in range(200)]

        def register(offset: int) -> None:
            for index in range(offset, len(schemas), 4):
                registry.add(schemas[index], index)

        threads = [threading.Thread(target=register, args=(offset,)) for offset in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert all(registry.get(schema) == index for index, schema in enumerate(schemas))


# ###############
# Schema Metadata
# ###############


class TestSchemaMeta:
    def test_meta_registers_clone(self) -> None:
        base = sk.string()
        described = base.meta(title="Name", id="name")
        assert described is not base
        assert GLOBAL_REGISTRY.get(base) is None
        meta = described.metadata
        assert meta is not None
        assert (meta.title, meta.id) == ("Name", "name")

    def test_describe(self) -> None:
        schema = sk.int_().describe("A count")
        assert schema.description == "A count"

    def test_description_parameter(self) -> None:
        assert sk.string(description="Label").description == "Label"

    def test_extra_keys_allowed(self) -> None:
        meta = sk.string().meta(owner="team-a").metadata
        assert meta is not None
        assert meta.model_dump()["owner"] == "team-a"

    def test_modifiers_inherit_metadata_except_id(self) -> None:
        schema = sk.string().meta(id="name", description="Label").min(1)
        meta = schema.metadata
        assert meta is not None
        assert meta.description == "Label"
        assert meta.id is None

    def test_meta_merges(self) -> None:
        schema = sk.string().describe("Label").meta(title="Title")
        meta = schema.metadata
        assert meta is not None
        assert (meta.description, meta.title) == ("Label", "Title")

    def test_registry_does_not_affect_parsing(self) -> None:
        plain = sk.string().min(2)
        described = plain.describe("Two or more")
        assert not plain.safe_parse("a").success
        assert not described.safe_parse("a").success
