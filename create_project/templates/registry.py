"""Template catalog and option selection.

Each ``Template`` names a bundled project directory, the options a user may
pick for it, the options it always implies (``project_options``) and the
dependency overrides it declares.  ``select_options`` turns a raw option
list into the ordered selection handed to the dependency resolver.
"""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel, Field

from create_project.errors import ScaffoldError
from create_project.resolver.models import OverrideRuleSet
from create_project.utils import print_warning


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UnknownTemplateError(ScaffoldError):
    """Raised when no template has the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        available = ", ".join(t.name for t in TEMPLATES)
        super().__init__(f"Unknown template '{name}'. Available templates: {available}")


class UnknownOptionError(ScaffoldError):
    """Raised when an option is not offered by the selected template."""

    def __init__(self, template: str, options: Sequence[str]) -> None:
        self.template = template
        self.options = list(options)
        super().__init__(
            f"Template '{template}' does not support option(s): {', '.join(self.options)}"
        )


class OptionConflictError(ScaffoldError):
    """Raised when mutually exclusive options are selected together."""


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TemplateOption(BaseModel):
    """An option that can be selected for a template."""
    name: str = Field(..., description="Internal option name, e.g. 'eslint'")
    label: str = Field(..., description="Display label")
    hint: str = Field(default="", description="Longer description of the option")


class Template(BaseModel):
    """A bundled project template."""
    name: str = Field(..., description="Internal template name, e.g. 'react'")
    label: str = Field(..., description="Display label")
    hint: str = Field(default="")
    color: str = Field(default="white", description="Rich style used when listing the template")
    template_dir: str = Field(..., description="Directory name under the templates root")
    options: list[TemplateOption] = Field(default_factory=list)
    project_dependency_overrides: Optional[OverrideRuleSet] = Field(default=None)
    project_options: list[str] = Field(
        default_factory=list, description="Options always in effect for this template"
    )
    recommended: list[str] = Field(default_factory=list)

    @property
    def option_names(self) -> list[str]:
        return [o.name for o in self.options]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

OPTION_ESLINT = TemplateOption(name="eslint", label="ESLint", hint="Configure ESLint linting.")
OPTION_PRETTIER = TemplateOption(
    name="prettier", label="Prettier", hint="Configure Prettier code formatter."
)
OPTION_EDITOR_CONFIG = TemplateOption(
    name="editorconfig",
    label="EditorConfig",
    hint="Add .editorconfig file for setting consistent editor settings.",
)
OPTION_VITEST = TemplateOption(name="vitest", label="Vitest", hint="Add Vitest testing framework.")
OPTION_GITHOOKS = TemplateOption(
    name="githooks",
    label="Native git-hooks",
    hint="Configure a directory for native git-hooks and add a pre-commit hook.",
)
OPTION_HUSKY = TemplateOption(
    name="husky",
    label="Husky",
    hint="Configure Husky git-hook manager and add a pre-commit hook.",
)
OPTION_GITHUB_ACTIONS = TemplateOption(
    name="githubActions", label="GitHub Actions", hint="Add GitHub Actions workflows."
)
OPTION_REACT_TESTING_LIBRARY = TemplateOption(
    name="reactTestingLibrary",
    label="React Testing Library",
    hint="A testing library for testing React components.",
)

COMMON_OPTIONS: list[TemplateOption] = [
    OPTION_ESLINT,
    OPTION_PRETTIER,
    OPTION_EDITOR_CONFIG,
    OPTION_VITEST,
    OPTION_GITHOOKS,
    OPTION_HUSKY,
    OPTION_GITHUB_ACTIONS,
]
COMMON_RECOMMENDED: list[str] = ["eslint", "prettier", "editorconfig"]
REACT_OPTIONS: list[TemplateOption] = [OPTION_REACT_TESTING_LIBRARY]

# Mutually exclusive option pairs.
EXCLUSIVE_OPTIONS: list[tuple[str, str]] = [("husky", "githooks")]

# Option -> option it cannot work without.
REQUIRED_OPTIONS: dict[str, str] = {"reactTestingLibrary": "vitest"}

TEMPLATES: list[Template] = [
    Template(
        name="node",
        label="Node",
        hint="A basic Node.js TS project.",
        color="green",
        template_dir="template-node",
        options=list(COMMON_OPTIONS),
        recommended=list(COMMON_RECOMMENDED),
    ),
    Template(
        name="react",
        label="React",
        hint="A React TS web application project.",
        color="cyan",
        template_dir="template-react",
        options=[*COMMON_OPTIONS, *REACT_OPTIONS],
        project_options=["react"],
        project_dependency_overrides=OverrideRuleSet.parse(
            {"devDependencies": [{"option": "vitest", "packages": ["jsdom"]}]}
        ),
        recommended=list(COMMON_RECOMMENDED),
    ),
    Template(
        name="react-lib",
        label="React-lib",
        hint="A TS project for creating a React component library.",
        color="cyan",
        template_dir="template-react-lib",
        options=[*COMMON_OPTIONS, *REACT_OPTIONS],
        project_options=["react", "lib"],
        project_dependency_overrides=OverrideRuleSet.parse(
            {
                "devDependencies": [
                    "react",
                    "react-dom",
                    {"option": "vitest", "packages": ["jsdom"]},
                ],
                "peerDependencies": [
                    {"package": "react", "version": ">=18.0.0"},
                    {"package": "react-dom", "version": ">=18.0.0"},
                ],
            }
        ),
        recommended=list(COMMON_RECOMMENDED),
    ),
]


def get_template(name: str) -> Template:
    """Return the template called *name*.

    Raises:
        UnknownTemplateError: If there is no such template.
    """
    for template in TEMPLATES:
        if template.name == name:
            return template
    raise UnknownTemplateError(name)


# ---------------------------------------------------------------------------
# Option selection
# ---------------------------------------------------------------------------


def select_options(template: Template, options: Sequence[str]) -> list[str]:
    """Validate and order the options chosen for *template*.

    * Unknown options are rejected.
    * Mutually exclusive options (``husky`` and ``githooks``) are rejected.
    * An option that requires another one pulls it in, with a warning.
    * Options are ordered as the template lists them, then the template's
      ``project_options`` are appended.

    Returns:
        The selection in the order the resolver should apply it.

    Raises:
        UnknownOptionError: If an option is not offered by the template.
        OptionConflictError: If mutually exclusive options are selected.
    """
    chosen = list(dict.fromkeys(options))
    unknown = [o for o in chosen if o not in template.option_names]
    if unknown:
        raise UnknownOptionError(template.name, unknown)

    for first, second in EXCLUSIVE_OPTIONS:
        if first in chosen and second in chosen:
            raise OptionConflictError(
                f"Options '{first}' and '{second}' cannot be selected together."
            )

    for option, required in REQUIRED_OPTIONS.items():
        if option in chosen and required not in chosen and required in template.option_names:
            print_warning(f"'{option}' requires '{required}' -- adding '{required}'.")
            chosen.append(required)

    ordered = [name for name in template.option_names if name in chosen]
    extra = [o for o in template.project_options if o not in ordered]
    return [*ordered, *extra]
