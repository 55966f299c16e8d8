"""Fake commerce query — in-memory entity store for testing and development."""

import copy

from engagement.commerce.port import CommerceQuery


class FakeCommerceQuery(CommerceQuery):
    """Serves entities added with ``add()``; relations are resolved by reference ids.

    A cart or order stored with ``customer_id`` gets its ``customer`` embedded
    from the stored customers when ``customer`` is requested. ``items`` are
    stored inline on the record.
    """

    def __init__(self):
        self._records: dict[str, dict[str, dict]] = {}
        self.calls: list[dict] = []

    def add(self, entity: str, record: dict) -> dict:
        self._records.setdefault(entity, {})[record["id"]] = copy.deepcopy(record)
        return record

    def retrieve(self, entity: str, entity_id: str, relations: tuple[str, ...] = ()) -> dict | None:
        self.calls.append({"entity": entity, "id": entity_id, "relations": tuple(relations)})

        stored = self._records.get(entity, {}).get(entity_id)
        if stored is None:
            return None

        record = copy.deepcopy(stored)
        items = record.pop("items", None)
        if "items" in relations:
            record["items"] = items or []
        if "customer" in relations and record.get("customer_id"):
            customer = self._records.get("customer", {}).get(record["customer_id"])
            record["customer"] = copy.deepcopy(customer) if customer else None
        return record

    def reset(self):
        """Clear stored entities (useful between tests)."""
        self._records.clear()
        self.calls.clear()
