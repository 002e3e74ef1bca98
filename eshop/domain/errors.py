# eshop/domain/errors.py


class EShopError(Exception):
    """Base class for domain failures."""


class ValidationError(EShopError):
    """Client input is malformed (surfaced as 400)."""


class NotFoundError(EShopError):
    """Requested entity does not exist (surfaced as 404)."""


class StorageError(EShopError):
    """Database read/write failed."""


class ProviderError(EShopError):
    """Embedding or chat provider call failed."""
