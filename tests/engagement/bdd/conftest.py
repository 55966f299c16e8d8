"""Shared BDD fixtures and step definitions for the Engagement domain."""

import dataclasses
import json

import pytest
from engagement.analytics import set_analytics_provider
from engagement.analytics.bloomreach import BloomreachAnalyticsProvider
from engagement.config import BloomreachOptions
from engagement.notification import set_notification_provider
from engagement.notification.bloomreach import BloomreachNotificationProvider
from pytest_bdd import given, parsers, then


@pytest.fixture()
def bloomreach():
    """Mutable holder for the options the scenario builds up."""
    return {"options": None}


def _requests_to(http, path_fragment):
    return [json.loads(call.kwargs["data"]) for call in http.post.call_args_list if path_fragment in call.args[0]]


@pytest.fixture()
def install_providers(bloomreach, http):
    """Wire Bloomreach providers built from the scenario's options onto the stub session."""

    def _install():
        options = bloomreach["options"]
        set_notification_provider(BloomreachNotificationProvider(options, session=http))
        set_analytics_provider(BloomreachAnalyticsProvider(options, session=http))

    return _install


# ---------------------------------------------------------------------------
# Given steps: configuration
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a Bloomreach project "{project_id}" with integration "{integration_id}"'))
def bloomreach_project(bloomreach, project_id, integration_id):
    bloomreach["options"] = BloomreachOptions(
        key_id="key-1",
        secret="s3cret",
        project_id=project_id,
        integration_id=integration_id,
        from_email="shop@example.com",
        from_name="Example Shop",
    )


@given(parsers.cfparse('template "{template}" is mapped to "{template_id}" in campaign "{campaign}"'))
def map_template(bloomreach, template, template_id, campaign):
    options = bloomreach["options"]
    bloomreach["options"] = dataclasses.replace(
        options,
        template_mappings={**options.template_mappings, template: template_id},
        campaign_mappings={**options.campaign_mappings, template: campaign},
    )


@given(parsers.cfparse('no template is mapped for "{template}"'))
def unmap_template(bloomreach, template):
    options = bloomreach["options"]
    mappings = {key: value for key, value in options.template_mappings.items() if key != template}
    bloomreach["options"] = dataclasses.replace(options, template_mappings=mappings)


# ---------------------------------------------------------------------------
# Given steps: commerce data
# ---------------------------------------------------------------------------
@given(parsers.cfparse('customer "{customer_id}" with email "{email}"'))
def customer(commerce, customer_id, email):
    commerce.add("customer", {"id": customer_id, "email": email, "first_name": "Alice", "last_name": "Smith"})


@given(parsers.cfparse('an order "{order_id}" for customer "{customer_id}"'))
def order(commerce, order_id, customer_id):
    commerce.add("order", {"id": order_id, "display_id": 1001, "customer_id": customer_id, "items": []})


@given(parsers.cfparse('a guest order "{order_id}"'))
def guest_order(commerce, order_id):
    commerce.add("order", {"id": order_id, "display_id": 1002, "items": []})


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('Bloomreach receives an email using template "{template_id}" for "{email}"'))
def email_sent(http, template_id, email):
    (body,) = _requests_to(http, "/email/v2/")
    assert body["email_content"]["template_id"] == template_id
    assert body["recipient"]["email"] == email
    assert body["recipient"]["customer_ids"] == {"registered": email}


@then(parsers.cfparse('the email is sent in campaign "{campaign}"'))
def email_campaign(http, campaign):
    (body,) = _requests_to(http, "/email/v2/")
    assert body["campaign_name"] == campaign


@then("no email is sent to Bloomreach")
def no_email(http):
    assert _requests_to(http, "/email/v2/") == []


@then(parsers.cfparse('Bloomreach records an "{event_type}" event for "{customer_id}"'))
def event_recorded(http, event_type, customer_id):
    (body,) = _requests_to(http, "/track/v2/")
    assert body["event_type"] == event_type
    assert body["customer_ids"] == {"id": customer_id}


@then("no event is sent to Bloomreach")
def no_event(http):
    assert _requests_to(http, "/track/v2/") == []
