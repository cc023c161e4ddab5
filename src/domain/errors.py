class TransientStorageError(Exception):
    """Storage stayed unreachable after the bounded retries. Safe to retry later."""


class ConfigurationError(Exception):
    """The service cannot start with the given configuration."""
