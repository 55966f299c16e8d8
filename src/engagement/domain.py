"""Engagement bounded context — forwards commerce lifecycle events to Bloomreach.

Consumes cart, customer, order and user events published by the commerce
host and turns them into transactional email/SMS sends and tracked
customer events on the Bloomreach (Exponea) platform. Owns no aggregates
and persists nothing; every side effect goes out through a provider port.

Importing this module leaves the host's logging untouched. Hosts that
want engagement's log output call
``engagement.utils.logging.configure_logging()`` at startup.
"""

from protean.domain import Domain

from engagement.utils.logging import get_logger

logger = get_logger(__name__)

engagement = Domain(name="engagement")
