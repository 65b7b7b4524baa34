"""
Error hierarchy. Every error raised by the package derives from `InvoicerError`.
"""

from __future__ import annotations


class InvoicerError(Exception):
    """Base class for all invoicer errors."""


class InvalidAmount(InvoicerError, ValueError):
    """Amount cannot be formatted (NaN, infinity or not a decimal)."""


class UnsupportedCurrency(InvoicerError, ValueError):
    """ISO 4217 code is not known to the formatter."""


class InvalidInvoice(InvoicerError, ValueError):
    pass


class InvalidRegistrationNumber(InvoicerError, ValueError):
    pass


class InvalidIban(InvoicerError, ValueError):
    pass


class FontMetricsUnavailable(InvoicerError, RuntimeError):
    """The bundled fonts are missing or cannot be parsed."""


class RenderIOError(InvoicerError, OSError):
    """Output file could not be written. No partial file is left behind."""


class RegistryError(InvoicerError):
    """Base class for company registry lookups."""


class EntityNotFound(RegistryError):
    pass


class BadResponse(RegistryError):
    pass


class RegistryNetworkError(RegistryError):
    pass
