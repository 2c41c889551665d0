"""Tests for the resolver data model (create_project.resolver.models).

Tests cover:
- PlainPackage / ConditionedGroup parsing from descriptor shapes
- OverrideRuleSet.parse variant selection and validation
- DefaultDependencies aliases and recursion
- ResolvedDependencies accessors
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from create_project.resolver import DEFAULT_DEPENDENCIES
from create_project.resolver.models import (
    ConditionedGroup,
    DefaultDependencies,
    OverrideRuleSet,
    PlainPackage,
    ResolvedDependencies,
    Section,
    parse_default_table,
    parse_override_entry,
)


class TestPlainPackage:
    @pytest.mark.unit
    def test_parse_bare_name(self):
        package = PlainPackage.parse("eslint")
        assert package.name == "eslint"
        assert package.version is None
        assert package.pinned_version == ""

    @pytest.mark.unit
    def test_parse_object_with_version(self):
        package = PlainPackage.parse({"package": "eslint", "version": "^9.0.0"})
        assert package == PlainPackage(name="eslint", version="^9.0.0")

    @pytest.mark.unit
    def test_empty_version_becomes_none(self):
        assert PlainPackage.parse({"package": "eslint", "version": ""}).version is None

    @pytest.mark.unit
    def test_empty_name_is_rejected(self):
        with pytest.raises(ValidationError):
            PlainPackage.parse("")

    @pytest.mark.unit
    def test_is_frozen(self):
        package = PlainPackage(name="eslint")
        with pytest.raises(ValidationError):
            package.name = "prettier"


class TestOverrideEntries:
    @pytest.mark.unit
    def test_string_is_plain(self):
        assert isinstance(parse_override_entry("jsdom"), PlainPackage)

    @pytest.mark.unit
    def test_package_object_is_plain(self):
        entry = parse_override_entry({"package": "jsdom", "version": "1.0.0"})
        assert isinstance(entry, PlainPackage)
        assert entry.kind == "plain"

    @pytest.mark.unit
    def test_group_is_conditioned(self):
        entry = parse_override_entry(
            {"option": "react", "packages": ["jsdom", {"package": "react", "version": "^19"}]}
        )
        assert isinstance(entry, ConditionedGroup)
        assert entry.kind == "conditioned"
        assert entry.option == "react"
        assert [p.name for p in entry.packages] == ["jsdom", "react"]
        assert entry.packages[1].version == "^19"

    @pytest.mark.unit
    def test_group_without_option_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_override_entry({"packages": ["jsdom"]})

    @pytest.mark.unit
    def test_group_with_string_packages_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_override_entry({"option": "vitest", "packages": "jsdom"})

    @pytest.mark.unit
    def test_rule_set_with_string_packages_is_rejected(self):
        with pytest.raises(ValidationError):
            OverrideRuleSet.parse({"devDependencies": [{"option": "vitest", "packages": "jsdom"}]})

    @pytest.mark.unit
    def test_parsed_models_pass_through(self):
        package = PlainPackage(name="a")
        assert parse_override_entry(package) is package


class TestOverrideRuleSet:
    @pytest.mark.unit
    def test_parse_splits_sections(self):
        rules = OverrideRuleSet.parse(
            {
                "dependencies": ["react"],
                "devDependencies": ["vitest", {"option": "react", "packages": ["jsdom"]}],
                "peerDependencies": [{"package": "react", "version": ">=18"}],
            }
        )
        assert [p.name for p in rules.unconditional(Section.DEPENDENCIES)] == ["react"]
        assert [p.name for p in rules.unconditional(Section.DEV_DEPENDENCIES)] == ["vitest"]
        assert [g.option for g in rules.conditioned(Section.DEV_DEPENDENCIES)] == ["react"]
        assert rules.unconditional(Section.PEER_DEPENDENCIES)[0].version == ">=18"

    @pytest.mark.unit
    def test_parse_none_gives_empty_rules(self):
        rules = OverrideRuleSet.parse(None)
        for section in Section:
            assert rules.entries(section) == ()

    @pytest.mark.unit
    def test_round_trips_through_json(self):
        rules = OverrideRuleSet.parse(
            {"devDependencies": ["vitest", {"option": "react", "packages": ["jsdom"]}]}
        )
        restored = OverrideRuleSet.model_validate_json(rules.model_dump_json(by_alias=True))
        assert restored == rules


class TestDefaultDependencies:
    @pytest.mark.unit
    def test_aliases_and_nesting(self):
        table = parse_default_table(
            {
                "prettier": {
                    "devDependencies": ["prettier"],
                    "withOption": {"eslint": {"devDependencies": ["eslint-config-prettier"]}},
                }
            }
        )
        node = table["prettier"]
        assert node.packages(Section.DEV_DEPENDENCIES) == ("prettier",)
        assert node.packages(Section.DEPENDENCIES) == ()
        nested = node.with_option["eslint"]
        assert isinstance(nested, DefaultDependencies)
        assert nested.packages(Section.DEV_DEPENDENCIES) == ("eslint-config-prettier",)

    @pytest.mark.unit
    def test_with_option_is_read_only(self):
        node = parse_default_table(
            {"vitest": {"withOption": {"eslint": {"devDependencies": ["eslint-plugin-vitest"]}}}}
        )["vitest"]
        with pytest.raises(TypeError):
            node.with_option["react"] = DefaultDependencies()
        with pytest.raises(TypeError):
            DefaultDependencies().with_option["eslint"] = node

    @pytest.mark.unit
    def test_built_in_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_DEPENDENCIES["prettier"].with_option["vitest"] = DefaultDependencies()
        with pytest.raises(TypeError):
            DEFAULT_DEPENDENCIES["jest"] = DefaultDependencies()


class TestResolvedDependencies:
    @pytest.mark.unit
    def test_section_accessor(self):
        resolved = ResolvedDependencies(dev_dependencies={"vitest": "^3"})
        assert resolved.section(Section.DEV_DEPENDENCIES) == {"vitest": "^3"}
        assert resolved.section(Section.DEPENDENCIES) == {}

    @pytest.mark.unit
    def test_as_manifest_fields_uses_package_json_names(self):
        resolved = ResolvedDependencies(peer_dependencies={"react": ">=18"})
        assert resolved.as_manifest_fields()["peerDependencies"] == {"react": ">=18"}
