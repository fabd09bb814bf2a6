from tesvik_portal.clients.errors import EmailDeliveryError, EmbeddingError, ExchangeRateError
from tesvik_portal.core.errors import (
    AuthenticationRequiredError,
    NotFoundError,
    PermissionDeniedError,
    PortalError,
    RateLimitedError,
    ServiceUnavailableError,
    UpstreamServiceError,
    ValidationFailedError,
)


def test_status_codes():
    assert PortalError("x").status_code == 500
    assert NotFoundError("x").status_code == 404
    assert ValidationFailedError("x").status_code == 400
    assert AuthenticationRequiredError("x").status_code == 401
    assert PermissionDeniedError("x").status_code == 403
    assert UpstreamServiceError("x").status_code == 502
    assert RateLimitedError("x").status_code == 429
    assert ServiceUnavailableError("x").status_code == 503


def test_status_code_override_and_details():
    err = ValidationFailedError("bad", status_code=422, details={"field": "email"})
    assert err.status_code == 422
    assert err.details == {"field": "email"}
    assert err.message == "bad"
    assert str(err) == "bad"


def test_client_errors_are_upstream_errors():
    err = EmbeddingError("failed", upstream_status=401, details="invalid key")
    assert isinstance(err, UpstreamServiceError)
    assert err.upstream_status == 401
    assert err.status_code == 502
    assert issubclass(ExchangeRateError, UpstreamServiceError)
    assert issubclass(EmailDeliveryError, UpstreamServiceError)
