"""Pydantic v2 models for the dependency resolver.

Defines the data model the resolver operates on: manifest sections, package
references, override rule sets, the recursive default-dependency table and
the resolved result.  Template descriptors use loose JSON shapes (a package
may be a bare string or a ``{"package", "version"}`` object, an override
entry may be a package or an option-conditioned group); those shapes are
converted into the tagged ``PlainPackage | ConditionedGroup`` union here, at
parse time, so the resolver never inspects shapes.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Section(str, Enum):
    """A ``package.json`` dependency grouping."""
    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    PEER_DEPENDENCIES = "peerDependencies"


SECTIONS: tuple[Section, ...] = (
    Section.DEPENDENCIES,
    Section.DEV_DEPENDENCIES,
    Section.PEER_DEPENDENCIES,
)


# ---------------------------------------------------------------------------
# Package references & override rules
# ---------------------------------------------------------------------------

class PlainPackage(BaseModel):
    """A package name with an optional version constraint."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    name: str = Field(..., min_length=1, description="Package name, e.g. 'eslint'")
    version: Optional[str] = Field(
        default=None, description="Version constraint; empty means 'use the registry'"
    )

    @property
    def pinned_version(self) -> str:
        """The explicit version, or an empty string when none was given."""
        return self.version or ""

    @classmethod
    def parse(cls, raw: Any) -> "PlainPackage":
        """Build a package from ``"name"`` or ``{"package": ..., "version": ...}``."""
        if isinstance(raw, PlainPackage):
            return raw
        if isinstance(raw, str):
            return cls(name=raw)
        if isinstance(raw, dict) and "package" in raw:
            return cls(name=raw["package"], version=raw.get("version") or None)
        return cls.model_validate(raw)


class ConditionedGroup(BaseModel):
    """Packages that only apply when ``option`` is among the selected options."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["conditioned"] = "conditioned"
    option: str = Field(..., min_length=1, description="Option that must be selected")
    packages: tuple[PlainPackage, ...] = Field(default_factory=tuple)

    @classmethod
    def parse(cls, raw: Any) -> "ConditionedGroup":
        if isinstance(raw, ConditionedGroup):
            return raw
        if not isinstance(raw, dict):
            return cls.model_validate(raw)
        packages = raw.get("packages", ())
        if isinstance(packages, (list, tuple)):
            packages = tuple(PlainPackage.parse(p) for p in packages)
        # A non-list value (such as a bare string) fails validation.
        return cls(option=raw.get("option") or "", packages=packages)


OverrideEntry = Annotated[Union[PlainPackage, ConditionedGroup], Field(discriminator="kind")]


def parse_override_entry(raw: Any) -> PlainPackage | ConditionedGroup:
    """Decide the variant of one override entry from its descriptor shape."""
    if isinstance(raw, (PlainPackage, ConditionedGroup)):
        return raw
    if isinstance(raw, dict) and "packages" in raw:
        return ConditionedGroup.parse(raw)
    return PlainPackage.parse(raw)


class OverrideRuleSet(BaseModel):
    """Per-section dependency overrides declared by a template."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dependencies: tuple[OverrideEntry, ...] = Field(default_factory=tuple)
    dev_dependencies: tuple[OverrideEntry, ...] = Field(
        default_factory=tuple, alias="devDependencies"
    )
    peer_dependencies: tuple[OverrideEntry, ...] = Field(
        default_factory=tuple, alias="peerDependencies"
    )

    def entries(self, section: Section) -> tuple[PlainPackage | ConditionedGroup, ...]:
        """Return the override entries for *section*."""
        return getattr(self, _FIELD_BY_SECTION[section])

    def unconditional(self, section: Section) -> list[PlainPackage]:
        return [e for e in self.entries(section) if isinstance(e, PlainPackage)]

    def conditioned(self, section: Section) -> list[ConditionedGroup]:
        return [e for e in self.entries(section) if isinstance(e, ConditionedGroup)]

    @classmethod
    def parse(cls, raw: dict[str, Any] | None) -> "OverrideRuleSet":
        """Build a rule set from a template descriptor mapping.

        Keys are the manifest section names.  Each value is a list whose
        items are either a package (``"name"`` or ``{"package", "version"}``)
        or a conditioned group (``{"option", "packages"}``).

        Raises:
            pydantic.ValidationError: If a conditioned group has no option
                name or a package has no name.
        """
        raw = raw or {}
        return cls(
            **{
                _FIELD_BY_SECTION[section]: tuple(
                    parse_override_entry(item) for item in raw.get(section.value, [])
                )
                for section in SECTIONS
            }
        )


# ---------------------------------------------------------------------------
# Default dependency table
# ---------------------------------------------------------------------------

class DefaultDependencies(BaseModel):
    """Package names implied by an option, plus nested option combinations.

    ``with_option`` maps a second option name to another
    ``DefaultDependencies`` node that only applies when that option is also
    selected.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dependencies: tuple[str, ...] = Field(default_factory=tuple)
    dev_dependencies: tuple[str, ...] = Field(default_factory=tuple, alias="devDependencies")
    peer_dependencies: tuple[str, ...] = Field(default_factory=tuple, alias="peerDependencies")
    with_option: Mapping[str, DefaultDependencies] = Field(
        default_factory=dict, alias="withOption", validate_default=True
    )

    @field_validator("with_option", mode="after")
    @classmethod
    def _freeze_with_option(
        cls, value: Mapping[str, DefaultDependencies]
    ) -> Mapping[str, DefaultDependencies]:
        return MappingProxyType(dict(value))

    def packages(self, section: Section) -> tuple[str, ...]:
        """Return the unconditional package names of *section*."""
        return getattr(self, _FIELD_BY_SECTION[section])


def parse_default_table(raw: dict[str, Any]) -> dict[str, DefaultDependencies]:
    """Validate a raw ``{option: {...}}`` mapping into a default table."""
    return {option: DefaultDependencies.model_validate(node) for option, node in raw.items()}


# ---------------------------------------------------------------------------
# Resolved result
# ---------------------------------------------------------------------------

class ResolvedDependencies(BaseModel):
    """The final name -> version maps for every manifest section."""

    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    peer_dependencies: dict[str, str] = Field(default_factory=dict)
    unresolved: dict[Section, list[str]] = Field(
        default_factory=dict,
        description="Packages per section for which no version could be found",
    )

    def section(self, section: Section) -> dict[str, str]:
        """Return the resolved map for *section*."""
        return getattr(self, _FIELD_BY_SECTION[section])

    @property
    def has_unresolved(self) -> bool:
        return any(self.unresolved.values())

    def unresolved_names(self) -> list[str]:
        """Return every unresolved package as ``section:name`` strings."""
        return [
            f"{section.value}:{name}"
            for section in SECTIONS
            for name in self.unresolved.get(section, [])
        ]

    def as_manifest_fields(self) -> dict[str, dict[str, str]]:
        """Return the maps keyed by their ``package.json`` property names."""
        return {section.value: dict(self.section(section)) for section in SECTIONS}


_FIELD_BY_SECTION: dict[Section, str] = {
    Section.DEPENDENCIES: "dependencies",
    Section.DEV_DEPENDENCIES: "dev_dependencies",
    Section.PEER_DEPENDENCIES: "peer_dependencies",
}
