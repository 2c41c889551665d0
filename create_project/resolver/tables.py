"""Static dependency tables.

``LATEST_DEPENDENCY_VERSIONS`` is the version registry consulted for any
package reference left without an explicit version.  ``DEFAULT_DEPENDENCIES``
maps an option to the packages it implies; ``withOption`` nodes apply only
when the nested option is selected as well.

Both tables are built once at import time and never mutated.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .models import DefaultDependencies, parse_default_table


LATEST_DEPENDENCY_VERSIONS: Mapping[str, str] = MappingProxyType(
    {
        "@eslint/js": "^9.30.1",
        "@testing-library/jest-dom": "^6.6.3",
        "@testing-library/react": "^16.3.0",
        "@types/react": "^19.1.8",
        "@types/react-dom": "^19.1.6",
        "@vitejs/plugin-react": "^4.6.0",
        "@vitest/coverage-v8": "^3.2.4",
        "eslint": "^9.30.1",
        "eslint-config-prettier": "^10.1.5",
        "eslint-plugin-react-hooks": "^5.2.0",
        "eslint-plugin-react-refresh": "^0.4.20",
        "eslint-plugin-vitest": "^0.5.4",
        "globals": "^16.3.0",
        "husky": "^9.1.7",
        "jsdom": "^26.1.0",
        "prettier": "^3.6.2",
        "react": "^19.1.0",
        "react-dom": "^19.1.0",
        "stylelint": "^16.21.1",
        "stylelint-config-standard": "^38.0.0",
        "typescript": "~5.8.3",
        "typescript-eslint": "^8.35.1",
        "vite": "^7.0.4",
        "vitest": "^3.2.4",
    }
)


DEFAULT_DEPENDENCIES: Mapping[str, DefaultDependencies] = MappingProxyType(
    parse_default_table(
        {
            "eslint": {
                "devDependencies": ["@eslint/js", "eslint", "globals", "typescript-eslint"],
                "withOption": {
                    "react": {
                        "devDependencies": [
                            "eslint-plugin-react-hooks",
                            "eslint-plugin-react-refresh",
                        ],
                    },
                },
            },
            "prettier": {
                "devDependencies": ["prettier"],
                "withOption": {
                    "eslint": {"devDependencies": ["eslint-config-prettier"]},
                },
            },
            "vitest": {
                "devDependencies": ["vitest"],
                "withOption": {
                    "eslint": {"devDependencies": ["eslint-plugin-vitest"]},
                },
            },
            "husky": {
                "devDependencies": ["husky"],
            },
            "reactTestingLibrary": {
                "devDependencies": ["@testing-library/react", "@testing-library/jest-dom"],
            },
        }
    )
)
