import logging
from celery import shared_task
from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client
from app.config import twilio_settings

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def send_otp_message_task(self, phone_number: str, code: str, ttl_minutes: int = 5) -> None:
    """Deliver an OTP by SMS, or log it when Twilio is not configured."""
    settings = twilio_settings()
    if settings is None:
        logger.info("[SMS disabled] OTP issued for %s", phone_number[-4:])
        logger.debug({"event": "otp_issued", "phoneNumber": phone_number, "otp": code})
        return
    sid, token, sender = settings
    try:
        message = Client(sid, token).messages.create(
            from_=sender,
            to=f"+91{phone_number}",
            body=f"Your verification code is {code}. It expires in {ttl_minutes} minutes.",
        )
        logger.info("[SMS] OTP sent. SID: %s", message.sid)
    except TwilioRestException as exc:
        logger.error("Failed to send OTP: %s", exc)
        raise self.retry(exc=exc)
