import logging
from html import escape

import resend

from app.core.config import settings


logger = logging.getLogger(__name__)


def send_welcome_email(to_email: str, name: str) -> None:
    """Runs as a background task after /register responded; never raises."""
    if not settings.resend_api_key:
        logger.info("Welcome email to %s skipped: RESEND_API_KEY not configured", to_email)
        return

    resend.api_key = settings.resend_api_key
    params: resend.Emails.SendParams = {
        "from": settings.mail_from,
        "to": [to_email],
        "subject": "Welcome aboard",
        "html": f"""
            <p>Hi {escape(name)},</p>
            <p>Your account was created successfully. You can now log in with this email address.</p>
        """,
    }
    try:
        resend.Emails.send(params)
    except Exception:
        logger.exception("Welcome email to %s failed", to_email)
        return
    logger.info("Welcome email sent to %s", to_email)
