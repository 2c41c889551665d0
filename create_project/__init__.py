"""create-project -- scaffolds TypeScript projects from bundled templates."""

__version__ = "0.1.0"
