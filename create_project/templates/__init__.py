"""Bundled project templates and the catalog that describes them.

The ``files/`` directory holds the template projects copied into the target
directory; ``config_files/`` holds static configuration files installed for
some options.
"""

from create_project.templates.registry import (
    TEMPLATES,
    OptionConflictError,
    Template,
    TemplateOption,
    UnknownOptionError,
    UnknownTemplateError,
    get_template,
    select_options,
)

__all__ = [
    "TEMPLATES",
    "OptionConflictError",
    "Template",
    "TemplateOption",
    "UnknownOptionError",
    "UnknownTemplateError",
    "get_template",
    "select_options",
]
