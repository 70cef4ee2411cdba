"""Exceptions raised by the mention pipeline."""


class InvalidConfig(ValueError):
    """The mention configuration has an unsupported type.

    The ``mention-config`` value must be absent, a base URL string, or a
    mapping with a ``base_url`` key.
    """
