"""Commerce query port — read access to the host's carts, customers, orders and users.

The commerce host owns these entities; the Engagement domain only reads
them when one of its events arrives. Records are plain dicts shaped like
the host's API output, with requested relations embedded
(``cart["customer"]``, ``order["items"]``).
"""

from abc import ABC, abstractmethod


class CommerceQuery(ABC):
    """Abstract interface for commerce query adapters."""

    @abstractmethod
    def retrieve(self, entity: str, entity_id: str, relations: tuple[str, ...] = ()) -> dict | None:
        """Fetch one entity by id.

        Args:
            entity: ``cart``, ``customer``, ``order`` or ``user``
            relations: related records to embed (``customer``, ``items``)

        Returns:
            The entity record, or None if it does not exist.
        """
        ...
