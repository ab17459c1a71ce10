import pytest
from twilio.base.exceptions import TwilioRestException

from app.tasks import notifications


class FakeMessages:
    def __init__(self, sent, fail=False):
        self.sent = sent
        self.fail = fail

    def create(self, **kwargs):
        if self.fail:
            raise TwilioRestException(500, '/Messages', 'upstream down')
        self.sent.append(kwargs)

        class Message:
            sid = 'SM123'
        return Message()


def fake_client(sent, fail=False):
    class Client:
        def __init__(self, sid, token):
            self.messages = FakeMessages(sent, fail)
    return Client


def set_twilio_env(monkeypatch):
    monkeypatch.setenv('TWILIO_ACCOUNT_SID', 'AC123')
    monkeypatch.setenv('TWILIO_AUTH_TOKEN', 'secret')
    monkeypatch.setenv('TWILIO_SMS_FROM', '+15550001111')


def test_sms_sent_when_twilio_configured(monkeypatch):
    sent = []
    set_twilio_env(monkeypatch)
    monkeypatch.setattr(notifications, 'Client', fake_client(sent))

    notifications.send_otp_message_task('9876543210', '1234', 5)

    assert len(sent) == 1
    assert sent[0]['to'] == '+919876543210'
    assert sent[0]['from_'] == '+15550001111'
    assert '1234' in sent[0]['body']
    assert '5 minutes' in sent[0]['body']


def test_sms_skipped_without_twilio(monkeypatch):
    sent = []
    for key in ('TWILIO_ACCOUNT_SID', 'TWILIO_AUTH_TOKEN', 'TWILIO_SMS_FROM'):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(notifications, 'Client', fake_client(sent))

    notifications.send_otp_message_task('9876543210', '1234', 5)
    assert sent == []


def test_sms_failure_surfaces_twilio_error_when_called_directly(monkeypatch):
    set_twilio_env(monkeypatch)
    monkeypatch.setattr(notifications, 'Client', fake_client([], fail=True))
    with pytest.raises(TwilioRestException):
        notifications.send_otp_message_task('9876543210', '1234', 5)


def test_task_bound_to_configured_celery_app():
    from celery_app import celery_app

    task = notifications.send_otp_message_task
    assert task.app is celery_app
    assert task.app.main == 'mandi'
    assert 'app.tasks.notifications.*' in task.app.conf.task_routes
