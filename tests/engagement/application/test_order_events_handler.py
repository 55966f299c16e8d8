"""Application tests for the OrderPlaced subscriber."""

from unittest.mock import patch

from engagement.subscribers.order_events import OrderEventsHandler
from shared.events.commerce import OrderPlaced


class TestOrderPlacedHandler:
    def test_sends_order_confirmation(self, storefront, notifier, tracker):
        OrderEventsHandler().on_order_placed(OrderPlaced(order_id="order_1"))

        (sent,) = notifier.sent
        assert sent.channel == "email"
        assert sent.to == "alice@example.com"
        assert sent.template == "order-placed"
        assert sent.data == {"order_id": "order_1", "order_number": 1001, "customer_name": "Alice Smith"}

    def test_tracks_order(self, storefront, notifier, tracker):
        OrderEventsHandler().on_order_placed(OrderPlaced(order_id="order_1"))

        assert len(tracker.events_named("order_placed")) == 1

    def test_guest_order_without_email_skips_notification(self, commerce, notifier, tracker):
        commerce.add("order", {"id": "order_guest", "display_id": 7})

        OrderEventsHandler().on_order_placed(OrderPlaced(order_id="order_guest"))

        assert notifier.sent == []
        assert tracker.tracked[0].actor_id is None

    def test_notification_failure_does_not_stop_tracking(self, storefront, notifier, tracker):
        notifier.configure(should_succeed=False, failure_reason="smtp down")

        with patch("engagement.subscribers.helpers.logger") as logger:
            OrderEventsHandler().on_order_placed(OrderPlaced(order_id="order_1"))

        assert len(tracker.events_named("order_placed")) == 1
        logger.error.assert_called_once()
        assert logger.error.call_args.kwargs["error"] == "smtp down"

    def test_tracking_failure_is_swallowed_after_notification(self, storefront, notifier, tracker):
        tracker.configure(should_succeed=False)

        OrderEventsHandler().on_order_placed(OrderPlaced(order_id="order_1"))

        assert len(notifier.sent) == 1
        assert tracker.tracked == []

    def test_missing_order_does_not_raise(self, commerce, notifier, tracker):
        OrderEventsHandler().on_order_placed(OrderPlaced(order_id="order_missing"))

        assert notifier.sent == []
        assert tracker.tracked == []
