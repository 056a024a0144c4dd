"""SQLAlchemy-backed implementation of SelectionRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from shopcore.domain.model.selection import Selection, SelectionLine
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.selection_repository import SelectionRepository
from shopcore.infrastructure.persistence.orm import SelectionLineRecord, SelectionRecord


class SqlAlchemySelectionRepository(SelectionRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- SelectionRepository interface ----------------------------------------

    def get_by_customer(self, customer_id: int) -> Selection | None:
        record = self._load(customer_id)
        return self._to_domain(record) if record is not None else None

    def get_or_create(self, customer_id: int) -> Selection:
        record = self._load(customer_id)
        if record is None:
            # A concurrent creator may win the unique constraint; the
            # savepoint keeps the outer transaction usable in that case.
            try:
                with self._session.begin_nested():
                    self._session.add(SelectionRecord(customer_id=customer_id))
            except IntegrityError:
                record = self._load(customer_id)
                if record is None:
                    raise
            else:
                record = self._load(customer_id)
        return self._to_domain(record)

    def save(self, selection: Selection) -> None:
        record = self._session.get(SelectionRecord, selection.id)
        existing = {line.id: line for line in record.lines}

        kept: set[int] = set()
        created: list[tuple[SelectionLine, SelectionLineRecord]] = []
        for line in selection.lines:
            price = line.frozen_unit_price.amount if line.frozen_unit_price else None
            if line.id is None:
                line_record = SelectionLineRecord(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    frozen_unit_price=price,
                )
                record.lines.append(line_record)
                created.append((line, line_record))
                continue
            line_record = existing[line.id]
            line_record.quantity = line.quantity
            line_record.frozen_unit_price = price
            kept.add(line.id)

        for line_id, line_record in existing.items():
            if line_id not in kept:
                record.lines.remove(line_record)

        self._session.flush()
        for line, line_record in created:
            line.id = line_record.id

    # --- Helpers --------------------------------------------------------------

    def _load(self, customer_id: int) -> SelectionRecord | None:
        stmt = (
            select(SelectionRecord)
            .where(SelectionRecord.customer_id == customer_id)
            .options(selectinload(SelectionRecord.lines))
        )
        return self._session.scalars(stmt).first()

    @staticmethod
    def _to_domain(record: SelectionRecord) -> Selection:
        return Selection(
            id=record.id,
            customer_id=record.customer_id,
            lines=[
                SelectionLine(
                    id=line.id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    frozen_unit_price=(
                        Money(line.frozen_unit_price)
                        if line.frozen_unit_price is not None
                        else None
                    ),
                )
                for line in record.lines
            ],
        )
