import json
from unittest.mock import MagicMock

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def engagement_bed():
    from engagement.domain import engagement

    bed = DomainFixture(engagement)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(engagement_bed):
    with engagement_bed.domain_context():
        yield


@pytest.fixture()
def options():
    from engagement.config import BloomreachOptions

    return BloomreachOptions(
        key_id="key-1",
        secret="s3cret",
        project_id="P",
        integration_id="int-1",
        from_email="shop@example.com",
        from_name="Example Shop",
        template_mappings={"order-placed": "tmpl_1", "cart-created": "tmpl_cart"},
        campaign_mappings={"order-placed": "Order Campaign", "cart-created": "Cart Campaign"},
        language="en",
    )


@pytest.fixture()
def http():
    """A stand-in ``requests.Session``; every POST answers with ``respond()``'s payload."""
    session = MagicMock()
    session.post.return_value = _response({"message_id": "msg-1", "success": True})
    return session


@pytest.fixture()
def respond(http):
    def _respond(payload, status_code=200):
        http.post.return_value = _response(payload, status_code)

    return _respond


@pytest.fixture()
def last_request(http):
    """Return (url, decoded JSON body, headers) of the most recent POST."""

    def _last_request():
        call = http.post.call_args
        return call.args[0], json.loads(call.kwargs["data"]), call.kwargs["headers"]

    return _last_request


@pytest.fixture()
def commerce():
    from engagement.commerce import set_commerce_query
    from engagement.commerce.fake import FakeCommerceQuery

    query = FakeCommerceQuery()
    set_commerce_query(query)
    return query


@pytest.fixture()
def notifier():
    from engagement.notification import set_notification_provider
    from engagement.notification.fake import FakeNotificationProvider

    provider = FakeNotificationProvider()
    set_notification_provider(provider)
    return provider


@pytest.fixture()
def tracker():
    from engagement.analytics import set_analytics_provider
    from engagement.analytics.fake import FakeAnalyticsProvider

    provider = FakeAnalyticsProvider()
    set_analytics_provider(provider)
    return provider


def _response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.text = json.dumps(payload)
    response.json.return_value = payload
    return response


@pytest.fixture()
def storefront(commerce):
    """A small commerce catalogue: one registered customer, a cart, an order and a back-office user."""
    commerce.add(
        "customer",
        {
            "id": "cus_1",
            "email": "alice@example.com",
            "first_name": "Alice",
            "last_name": "Smith",
            "has_account": True,
            "created_at": "2026-01-05T09:00:00Z",
            "updated_at": "2026-02-01T12:30:00Z",
        },
    )
    commerce.add(
        "cart",
        {
            "id": "cart_1",
            "customer_id": "cus_1",
            "currency_code": "eur",
            "subtotal": 3000,
            "total": 3600,
            "items": [
                {"id": "ci_1", "variant_id": "var_1", "product_id": "prod_1", "quantity": 2, "unit_price": 1000},
                {"id": "ci_2", "variant_id": "var_2", "product_id": "prod_2", "quantity": 1, "unit_price": 1000},
            ],
        },
    )
    commerce.add(
        "order",
        {
            "id": "order_1",
            "display_id": 1001,
            "customer_id": "cus_1",
            "currency_code": "eur",
            "status": "pending",
            "subtotal": 3000,
            "total": 3950,
            "tax_total": 600,
            "shipping_total": 350,
            "items": [
                {
                    "id": "li_1",
                    "variant_id": "var_1",
                    "product_id": "prod_1",
                    "quantity": 2,
                    "unit_price": 1000,
                    "total": 2000,
                },
            ],
        },
    )
    commerce.add(
        "user",
        {
            "id": "usr_1",
            "email": "ops@example.com",
            "first_name": "Olga",
            "last_name": "Ops",
            "created_at": "2026-03-10T08:00:00Z",
        },
    )
    return commerce
