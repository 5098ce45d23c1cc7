from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models import CreateCustomerRequest, Customer
from .base import BaseClient, coerce_model, expect_list, expect_object


@dataclass
class CustomersClient(BaseClient):
    def get_customers(self) -> list[Customer]:
        data = self._invoke("get_customers", idempotent=True)
        return [Customer.model_validate(row) for row in expect_list(data, "get_customers")]

    def create_customer(self, request: CreateCustomerRequest | Mapping[str, Any]) -> Customer:
        payload = coerce_model(request, CreateCustomerRequest)
        data = self._invoke("create_customer", payload.model_dump(mode="json", exclude_none=True))
        return Customer.model_validate(expect_object(data, "create_customer"))

    def search_customer(self, query: str) -> list[Customer]:
        term = query.strip()
        if not term:
            return []
        data = self._invoke("search_customer", {"query": term}, idempotent=True)
        return [Customer.model_validate(row) for row in expect_list(data, "search_customer")]
