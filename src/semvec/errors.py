"""
Error taxonomy for semantic vector construction.

- ConfigurationError: invalid parameters, raised before any accumulation.
- IndexAccessError: the text index cannot be read. Fatal for the run.
- RecoverableTermWarning: a posting or term was skipped. The run continues.
"""


class ConfigurationError(ValueError):
    """Invalid run configuration (bad parameter or parameter combination)."""


class IndexAccessError(RuntimeError):
    """The text index collaborator could not be read."""


class RecoverableTermWarning(UserWarning):
    """A term or posting contained unexpected data and was skipped."""
