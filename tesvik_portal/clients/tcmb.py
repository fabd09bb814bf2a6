from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import date, datetime
from typing import Dict, Optional

import httpx
from pydantic import BaseModel

from .errors import ExchangeRateError

CURRENCIES = ("USD", "EUR", "GBP")


class CurrencyRate(BaseModel):
    forex_buying: Optional[float] = None
    forex_selling: Optional[float] = None


class DailyRates(BaseModel):
    rate_date: date
    rates: Dict[str, CurrencyRate]

    def as_columns(self) -> Dict[str, Optional[float]]:
        """Flatten to ``usd_buying``, ``usd_selling``... column values."""
        columns: Dict[str, Optional[float]] = {}
        for code in CURRENCIES:
            rate = self.rates.get(code) or CurrencyRate()
            columns[f"{code.lower()}_buying"] = rate.forex_buying
            columns[f"{code.lower()}_selling"] = rate.forex_selling
        return columns


def _to_float(text: Optional[str]) -> Optional[float]:
    if text is None or not text.strip():
        return None
    try:
        return float(text.strip())
    except ValueError:
        return None


def _parse_date(root: ET.Element) -> date:
    raw = root.get("Date")
    if raw:
        try:
            return datetime.strptime(raw, "%m/%d/%Y").date()
        except ValueError:
            pass
    raw = root.get("Tarih")
    if raw:
        try:
            return datetime.strptime(raw, "%d.%m.%Y").date()
        except ValueError:
            pass
    return date.today()


def parse_today_xml(xml_text: str) -> DailyRates:
    """Parse the TCMB ``today.xml`` document.

    The root ``Tarih_Date`` element carries ``Date`` as MM/DD/YYYY; each
    ``Currency`` element carries ``ForexBuying`` / ``ForexSelling``.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ExchangeRateError("TCMB response is not valid XML", details=str(e)) from e

    rates: Dict[str, CurrencyRate] = {}
    for node in root.iter("Currency"):
        code = node.get("CurrencyCode") or node.get("Kod")
        if code not in CURRENCIES:
            continue
        rates[code] = CurrencyRate(
            forex_buying=_to_float(node.findtext("ForexBuying")),
            forex_selling=_to_float(node.findtext("ForexSelling")),
        )
    return DailyRates(rate_date=_parse_date(root), rates=rates)


class TcmbExchangeClient:
    """Fetches the Central Bank of the Republic of Türkiye daily exchange rates."""

    def __init__(
        self,
        url: str = "https://www.tcmb.gov.tr/kurlar/today.xml",
        *,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    async def fetch_today(self) -> DailyRates:
        try:
            self._logger.debug("TcmbExchangeClient.fetch_today: GET %s", self.url)
            r = await self._client.get(self.url)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ExchangeRateError(
                f"Failed to fetch TCMB data: {e.response.status_code}",
                upstream_status=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise ExchangeRateError(f"Failed to fetch TCMB data: {e}") from e
        rates = parse_today_xml(r.text)
        self._logger.debug("TcmbExchangeClient.fetch_today: date=%s currencies=%s", rates.rate_date, list(rates.rates))
        return rates
