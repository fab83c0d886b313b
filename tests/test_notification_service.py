"""
Tests for storefront/services/notification_service.py
"""
from unittest.mock import patch

from storefront.services.notification_service import NotificationService, send_reset_email_task


def test_reset_email_is_enqueued():
    with patch("storefront.services.notification_service.send_reset_email_task") as task:
        assert NotificationService.send_reset_email("a@example.com", "tok123") is True
    task.delay.assert_called_once_with("a@example.com", "tok123")


def test_enqueue_failure_is_reported_not_raised():
    with patch("storefront.services.notification_service.send_reset_email_task") as task:
        task.delay.side_effect = OSError("broker unreachable")
        assert NotificationService.send_reset_email("a@example.com", "tok123") is False


def test_task_sends_reset_link():
    with patch("storefront.services.notification_service.send_mail") as send_mail:
        result = send_reset_email_task.run("a@example.com", "tok123")

    assert result == {"status": "sent"}
    kwargs = send_mail.call_args.kwargs
    assert kwargs["to"] == "a@example.com"
    assert kwargs["subject"] == "Password Reset Token"
    assert "/reset?resetToken=tok123" in kwargs["html"]
