"""Tests for ping response classification."""

import pytest

from afkbot.services.octant import PingOutcome, PingStatus, classify_ping_payload


class TestClassifyPingPayload:
    """Tests for classify_ping_payload."""

    def test_literal_true_is_success(self):
        outcome = classify_ping_payload(True)

        assert outcome.status is PingStatus.SUCCESS
        assert outcome.ok

    @pytest.mark.parametrize("value", [True, 1, "yes"])
    def test_truthy_success_field_is_success(self, value):
        assert classify_ping_payload({"success": value}).status is PingStatus.SUCCESS

    def test_false_success_with_reason(self):
        """Test that the reason field is reported for logical failures."""
        outcome = classify_ping_payload({"success": False, "reason": "x"})

        assert outcome.status is PingStatus.LOGICAL_FAILURE
        assert outcome.reason == "x"
        assert outcome.payload == {"success": False, "reason": "x"}

    def test_missing_success_field_is_logical_failure(self):
        outcome = classify_ping_payload({"status": "ok"})

        assert outcome.status is PingStatus.LOGICAL_FAILURE
        assert outcome.reason == '{"status": "ok"}'

    def test_message_used_when_no_reason(self):
        outcome = classify_ping_payload({"success": False, "message": "session expired"})

        assert outcome.reason == "session expired"

    @pytest.mark.parametrize("payload", ["weird", None, False, 0, ["success"], "true"])
    def test_other_shapes_are_unexpected(self, payload):
        outcome = classify_ping_payload(payload)

        assert outcome.status is PingStatus.LOGICAL_FAILURE
        assert outcome.reason == "unexpected"


class TestPingOutcome:
    """Tests for PingOutcome constructors."""

    def test_transport_failure(self):
        outcome = PingOutcome.transport_failure("timeout")

        assert outcome.status is PingStatus.TRANSPORT_FAILURE
        assert outcome.reason == "timeout"
        assert not outcome.ok
