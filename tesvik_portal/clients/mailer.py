from __future__ import annotations

import logging
from typing import List, Optional, Union

import httpx

from tesvik_portal.core.errors import ConfigurationError

from .errors import EmailDeliveryError


class ResendEmailClient:
    """Thin async client for the Resend transactional e-mail API."""

    def __init__(
        self,
        base_url: str = "https://api.resend.com",
        *,
        api_key: Optional[str] = None,
        sender: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.sender = sender
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            raise ConfigurationError("Resend API key is not configured")
        return {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

    async def send(self, to: Union[str, List[str]], subject: str, html: str) -> Optional[str]:
        """Send one message and return the provider message id."""
        recipients = [to] if isinstance(to, str) else list(to)
        payload = {"from": self.sender, "to": recipients, "subject": subject, "html": html}
        headers = self._headers()
        try:
            self._logger.debug("ResendEmailClient.send: POST %s/emails to=%s", self.base_url, recipients)
            r = await self._client.post(f"{self.base_url}/emails", headers=headers, json=payload)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EmailDeliveryError(
                f"E-mail delivery failed: {e.response.status_code}",
                upstream_status=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"E-mail request failed: {e}") from e
        data = r.json() if r.content else {}
        return data.get("id") if isinstance(data, dict) else None
