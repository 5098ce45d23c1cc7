from __future__ import annotations

import os

import pytest

from fakes import BASE_URL
from goldpos_client_sdk.models import GoldPrice, GoldType
from goldpos_client_sdk.pricing import PriceSnapshot


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in [name for name in os.environ if name.startswith("GOLDPOS_")]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GOLDPOS_API_BASE_URL", BASE_URL)
    monkeypatch.setenv("GOLDPOS_RETRY_BACKOFF_SECONDS", "0")


@pytest.fixture
def snapshot() -> PriceSnapshot:
    return PriceSnapshot.from_rows(
        [
            GoldPrice(gold_type=GoldType.LM, purity=999, buy_price=950_000, sell_price=1_050_000),
            GoldPrice(gold_type=GoldType.LM, purity=750, buy_price=760_000, sell_price=850_000),
            GoldPrice(gold_type=GoldType.UBS, purity=999, buy_price=945_000, sell_price=1_045_000),
            {"gold_type": "Lokal", "purity": 375, "buy_price": 440_000, "sell_price": 0},
        ]
    )
