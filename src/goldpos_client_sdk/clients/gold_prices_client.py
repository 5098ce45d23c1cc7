from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from ..models import GoldPrice, GoldType, SetGoldPriceRequest
from ..pricing import PriceSnapshot
from .base import BaseClient, coerce_model, expect_list, expect_object


@dataclass
class GoldPricesClient(BaseClient):
    def get_today_prices(self) -> list[GoldPrice]:
        data = self._invoke("get_today_prices", idempotent=True)
        return [GoldPrice.model_validate(row) for row in expect_list(data, "get_today_prices")]

    def today_snapshot(self) -> PriceSnapshot:
        return PriceSnapshot.from_rows(self.get_today_prices())

    def set_gold_price(self, request: SetGoldPriceRequest | Mapping[str, Any]) -> GoldPrice:
        payload = coerce_model(request, SetGoldPriceRequest)
        data = self._invoke("set_gold_price", {"request": payload.model_dump(mode="json")})
        return GoldPrice.model_validate(expect_object(data, "set_gold_price"))

    def get_price_history(self, gold_type: GoldType | str, purity: int, days: int = 30) -> list[GoldPrice]:
        if days < 1:
            raise ValueError("days must be >= 1")
        data = self._invoke(
            "get_price_history",
            {"gold_type": GoldType(gold_type).value, "purity": purity, "days": days},
            idempotent=True,
        )
        return [GoldPrice.model_validate(row) for row in expect_list(data, "get_price_history")]

    def get_all_prices_for_date(self, day: date | str) -> list[GoldPrice]:
        value = day.isoformat() if isinstance(day, date) else day
        data = self._invoke("get_all_prices_for_date", {"date": value}, idempotent=True)
        return [GoldPrice.model_validate(row) for row in expect_list(data, "get_all_prices_for_date")]

    def get_price_for_calculation(self, gold_type: GoldType | str, purity: int) -> GoldPrice | None:
        data = self._invoke(
            "get_price_for_calculation",
            {"gold_type": GoldType(gold_type).value, "purity": purity},
            idempotent=True,
        )
        if data is None:
            return None
        return GoldPrice.model_validate(expect_object(data, "get_price_for_calculation"))
