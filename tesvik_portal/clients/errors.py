"""Error types raised by the third-party HTTP clients.

Each subclasses ``UpstreamServiceError`` so the server maps them to 502 unless
a more specific status applies.
"""

from __future__ import annotations

from tesvik_portal.core.errors import UpstreamServiceError


class EmbeddingError(UpstreamServiceError):
    """The embeddings API failed or returned an unexpected payload."""


class ExchangeRateError(UpstreamServiceError):
    """The exchange-rate feed could not be fetched or parsed."""


class EmailDeliveryError(UpstreamServiceError):
    """The e-mail provider rejected a message."""
