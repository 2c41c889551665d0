"""Dependency resolver -- merges template, default and override dependencies.

Quick usage::

    from create_project.resolver import OverrideRuleSet, resolve

    overrides = OverrideRuleSet.parse(
        {"devDependencies": [{"package": "eslint", "version": "1.0.0"}]}
    )
    result = resolve(["eslint", "prettier"], {"devDependencies": {}}, overrides)
    print(result.dev_dependencies)
"""

from create_project.resolver.engine import (
    DependencyResolver,
    resolve,
    sort_dependencies,
)
from create_project.resolver.models import (
    SECTIONS,
    ConditionedGroup,
    DefaultDependencies,
    OverrideRuleSet,
    PlainPackage,
    ResolvedDependencies,
    Section,
)
from create_project.resolver.tables import DEFAULT_DEPENDENCIES, LATEST_DEPENDENCY_VERSIONS

__all__ = [
    "DEFAULT_DEPENDENCIES",
    "LATEST_DEPENDENCY_VERSIONS",
    "SECTIONS",
    "ConditionedGroup",
    "DefaultDependencies",
    "DependencyResolver",
    "OverrideRuleSet",
    "PlainPackage",
    "ResolvedDependencies",
    "Section",
    "resolve",
    "sort_dependencies",
]
