"""JSON-document-backed implementation of CustomerRepository."""

from __future__ import annotations

from datetime import datetime

from storefront.domain.model.customer import Customer, OrderHistoryEntry, Role
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.repository.customer_repository import CustomerRepository


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, document: dict) -> None:
        self._records: dict[str, dict] = document["customers"]

    def get_by_id(self, user_id: str) -> Customer | None:
        raw = self._records.get(user_id)
        return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[Customer]:
        return [self._to_domain(raw) for raw in self._records.values()]

    def save(self, customer: Customer) -> None:
        self._records[customer.id] = self._to_raw(customer)

    @staticmethod
    def _to_raw(customer: Customer) -> dict:
        return {
            "id": customer.id,
            "name": customer.name,
            "address": customer.address,
            "role": customer.role.value,
            "orders": [
                {
                    "order_id": entry.order_id,
                    "status": entry.status.value,
                    "payment_status": entry.payment_status.value,
                    "placed_at": entry.placed_at.isoformat(),
                }
                for entry in customer.order_history
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            name=raw["name"],
            address=raw.get("address"),
            role=Role(raw.get("role", Role.USER.value)),
            order_history=[
                OrderHistoryEntry(
                    order_id=entry["order_id"],
                    status=OrderStatus(entry["status"]),
                    payment_status=PaymentStatus(entry["payment_status"]),
                    placed_at=datetime.fromisoformat(entry["placed_at"]),
                )
                for entry in raw.get("orders", [])
            ],
        )
