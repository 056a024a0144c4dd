"""Abstract repository for the Selection aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.selection import Selection


class SelectionRepository(ABC):

    @abstractmethod
    def get_by_customer(self, customer_id: int) -> Selection | None:
        """Return the customer's selection with its lines, or None."""

    @abstractmethod
    def get_or_create(self, customer_id: int) -> Selection:
        """Return the customer's selection, creating an empty one if absent.

        Idempotent: guarded by the one-selection-per-customer constraint.
        """

    @abstractmethod
    def save(self, selection: Selection) -> None:
        """Persist line additions, changes and removals; assign new line IDs."""
