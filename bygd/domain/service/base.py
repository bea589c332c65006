"""Base class for domain services."""


class Service:
    """Async coordinator between the pure domain rules and the stores.

    Services own the logfire spans for their operations and translate
    nothing: store failures surface as ``DataAccessError`` unchanged.
    """
