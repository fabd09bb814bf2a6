"""
Clients for third-party services.

- openai_embeddings: text embeddings (OpenAI)
- answer_generator: chat answers through a pydantic-ai agent
- tcmb: Central Bank daily exchange-rate XML feed
- geolocation: MaxMind GeoLite with ipgeolocation.io fallback
- mailer: Resend transactional e-mail
"""

from .answer_generator import AnswerGenerator
from .mailer import ResendEmailClient
from .errors import EmailDeliveryError, EmbeddingError, ExchangeRateError
from .geolocation import GeolocationClient, Location
from .openai_embeddings import Embedder, OpenAIEmbeddingClient
from .tcmb import DailyRates, TcmbExchangeClient

__all__ = [
    "AnswerGenerator",
    "DailyRates",
    "EmailDeliveryError",
    "Embedder",
    "EmbeddingError",
    "ExchangeRateError",
    "GeolocationClient",
    "Location",
    "OpenAIEmbeddingClient",
    "ResendEmailClient",
    "TcmbExchangeClient",
]
