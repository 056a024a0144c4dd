"""Abstract repository for the Order aggregate (the Order Ledger)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order with its lines and assign its ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_for_customer(self, customer_id: int) -> list[Order]:
        """Return the customer's orders, newest first."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order across customers, newest first."""

    @abstractmethod
    def save_status(self, order: Order) -> None:
        """Persist the order's status.  Nothing else is written."""
