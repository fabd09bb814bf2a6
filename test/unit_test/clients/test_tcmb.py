from __future__ import annotations

from datetime import date

import httpx
import pytest

from tesvik_portal.clients.errors import ExchangeRateError
from tesvik_portal.clients.tcmb import TcmbExchangeClient, parse_today_xml

TODAY_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Tarih_Date Tarih="02.01.2025" Date="01/02/2025" Bulten_No="2025/1">
  <Currency CrossOrder="0" Kod="USD" CurrencyCode="USD">
    <Unit>1</Unit>
    <Isim>ABD DOLARI</Isim>
    <ForexBuying>35.2783</ForexBuying>
    <ForexSelling>35.3419</ForexSelling>
  </Currency>
  <Currency CrossOrder="9" Kod="EUR" CurrencyCode="EUR">
    <Unit>1</Unit>
    <ForexBuying>36.6311</ForexBuying>
    <ForexSelling>36.6971</ForexSelling>
  </Currency>
  <Currency CrossOrder="10" Kod="GBP" CurrencyCode="GBP">
    <Unit>1</Unit>
    <ForexBuying>44.1270</ForexBuying>
    <ForexSelling></ForexSelling>
  </Currency>
  <Currency CrossOrder="1" Kod="AUD" CurrencyCode="AUD">
    <ForexBuying>21.9</ForexBuying>
  </Currency>
</Tarih_Date>
"""

URL = "http://mock-tcmb/kurlar/today.xml"


class TestParse:
    def test_known_currencies(self):
        rates = parse_today_xml(TODAY_XML)

        assert rates.rate_date == date(2025, 1, 2)
        assert set(rates.rates) == {"USD", "EUR", "GBP"}
        assert rates.rates["USD"].forex_buying == 35.2783
        assert rates.as_columns() == {
            "usd_buying": 35.2783,
            "usd_selling": 35.3419,
            "eur_buying": 36.6311,
            "eur_selling": 36.6971,
            "gbp_buying": 44.127,
            "gbp_selling": None,
        }

    def test_turkish_date_attribute(self):
        rates = parse_today_xml('<Tarih_Date Tarih="15.03.2025"></Tarih_Date>')
        assert rates.rate_date == date(2025, 3, 15)
        assert rates.as_columns()["usd_buying"] is None

    def test_invalid_xml(self):
        with pytest.raises(ExchangeRateError):
            parse_today_xml("<not-closed>")


async def test_fetch_today():
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == URL
        return httpx.Response(200, text=TODAY_XML)

    client = TcmbExchangeClient(URL, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    rates = await client.fetch_today()
    assert rates.rates["EUR"].forex_selling == 36.6971


async def test_fetch_today_upstream_failure():
    client = TcmbExchangeClient(
        URL, client=httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(503, text="down")))
    )
    with pytest.raises(ExchangeRateError) as exc_info:
        await client.fetch_today()
    assert exc_info.value.upstream_status == 503
