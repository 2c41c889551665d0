"""Exception base class shared by the scaffolder and the template catalog."""


class ScaffoldError(Exception):
    """Base class for errors that stop a scaffolding run."""
