"""Dependency resolution and merge engine.

Combines three sources of ``package.json`` dependencies into one
deduplicated, version-filled map per manifest section:

1. the dependencies already declared in the template's manifest,
2. the default dependencies implied by the selected options (including
   nested ``withOption`` combinations),
3. the template's override rules, unconditional first, then the ones
   conditioned on a selected option.

Precedence grows in that order; the last rule applied to a name wins.  Any
entry still lacking a version afterwards is filled from the version
registry.  The resolver performs no I/O and never mutates its arguments.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from .models import (
    SECTIONS,
    DefaultDependencies,
    OverrideRuleSet,
    PlainPackage,
    ResolvedDependencies,
    Section,
)
from .tables import DEFAULT_DEPENDENCIES, LATEST_DEPENDENCY_VERSIONS


DEFAULT_MAX_DEPTH = 8

BaseDependencies = Mapping[str, Mapping[str, str] | None]


class DependencyResolver:
    """Resolves the final dependency maps for a scaffolded project.

    Attributes:
        default_dependencies: Option name -> packages implied by that option.
        versions: Package name -> known-good version string.
        max_depth: Maximum ``withOption`` nesting that is expanded.
    """

    def __init__(
        self,
        default_dependencies: Mapping[str, DefaultDependencies] | None = None,
        versions: Mapping[str, str] | None = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.default_dependencies = (
            DEFAULT_DEPENDENCIES if default_dependencies is None else default_dependencies
        )
        self.versions = LATEST_DEPENDENCY_VERSIONS if versions is None else versions
        self.max_depth = max_depth

    # -- Public API --------------------------------------------------------

    def resolve(
        self,
        selected_options: Sequence[str],
        base_dependencies: BaseDependencies | None = None,
        overrides: OverrideRuleSet | None = None,
    ) -> ResolvedDependencies:
        """Resolve all three manifest sections independently.

        Args:
            selected_options: Selected option names, in selection order.
            base_dependencies: ``{section name: {package: version}}`` as read
                from the template's ``package.json``.  Missing sections are
                treated as empty.
            overrides: The template's override rules, if any.

        Returns:
            A ``ResolvedDependencies`` with one map per section and the names
            whose version could not be determined.
        """
        options = list(dict.fromkeys(selected_options))
        base = base_dependencies or {}
        maps: dict[Section, dict[str, str]] = {}
        unresolved: dict[Section, list[str]] = {}

        for section in SECTIONS:
            resolved, missing = self.resolve_section(
                section, options, base.get(section.value), overrides
            )
            maps[section] = resolved
            if missing:
                unresolved[section] = missing

        return ResolvedDependencies(
            dependencies=maps[Section.DEPENDENCIES],
            dev_dependencies=maps[Section.DEV_DEPENDENCIES],
            peer_dependencies=maps[Section.PEER_DEPENDENCIES],
            unresolved=unresolved,
        )

    def resolve_section(
        self,
        section: Section,
        selected_options: Sequence[str],
        base: Mapping[str, str] | None = None,
        overrides: OverrideRuleSet | None = None,
    ) -> tuple[dict[str, str], list[str]]:
        """Resolve a single section.

        Returns:
            ``(name -> version map, names left without a version)``.
        """
        selected = list(dict.fromkeys(selected_options))

        # 1. Seed from the template manifest.
        working: dict[str, str] = {name: version or "" for name, version in (base or {}).items()}

        # 2. Default dependencies never overwrite what is already there.
        self._expand_defaults(section, selected, working)

        if overrides is not None:
            # 3. Unconditional overrides.
            for package in overrides.unconditional(section):
                _apply_override(package, working)

            # 4. Conditioned overrides, in selection order.
            groups = overrides.conditioned(section)
            for option in selected:
                for group in groups:
                    if group.option != option:
                        continue
                    for package in group.packages:
                        _apply_override(package, working)

        # 5. Fill missing versions from the registry.
        missing: list[str] = []
        for name, version in working.items():
            if version:
                continue
            known = self.versions.get(name, "")
            working[name] = known
            if not known:
                missing.append(name)

        return working, missing

    # -- Default expansion -------------------------------------------------

    def _expand_defaults(
        self,
        section: Section,
        selected: list[str],
        working: dict[str, str],
    ) -> None:
        self._collect(self.default_dependencies, section, selected, working, depth=1, path=())

    def _collect(
        self,
        table: Mapping[str, DefaultDependencies],
        section: Section,
        selected: list[str],
        working: dict[str, str],
        *,
        depth: int,
        path: tuple[int, ...],
    ) -> None:
        if depth > self.max_depth:
            return
        for option in selected:
            node = table.get(option)
            if node is None or id(node) in path:
                continue
            for name in node.packages(section):
                working.setdefault(name, "")
            if node.with_option:
                self._collect(
                    node.with_option,
                    section,
                    selected,
                    working,
                    depth=depth + 1,
                    path=(*path, id(node)),
                )


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------

def _apply_override(package: PlainPackage, working: dict[str, str]) -> None:
    """Add *package* or replace the version of an existing entry."""
    working[package.name] = package.pinned_version


def resolve(
    selected_options: Sequence[str],
    base_dependencies: BaseDependencies | None = None,
    overrides: OverrideRuleSet | None = None,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ResolvedDependencies:
    """Resolve dependencies against the built-in static tables."""
    resolver = DependencyResolver(max_depth=max_depth)
    return resolver.resolve(selected_options, base_dependencies, overrides)


def sort_dependencies(dependencies: Mapping[str, str]) -> dict[str, str]:
    """Return *dependencies* ordered for presentation in ``package.json``.

    Scoped (``@``-prefixed) names come first; within each group names are
    ordered alphabetically, case-insensitively.
    """
    ordered = sorted(
        dependencies,
        key=lambda name: (not name.startswith("@"), name.casefold(), name),
    )
    return {name: dependencies[name] for name in ordered}
