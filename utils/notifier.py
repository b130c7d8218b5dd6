"""
utils/notifier.py
------------------
Administrator e-mail notifications. Senders raise NotificationError on
failure; callers decide whether that matters (leave submission does not).
"""

import logging
import smtplib
from email.mime.text import MIMEText

import requests

logger = logging.getLogger(__name__)

BREVO_SEND_URL = "https://api.brevo.com/v3/smtp/email"


class NotificationError(Exception):
    pass


class NotificationSender:

    def send(self, subject, html):
        raise NotImplementedError


class NullSender(NotificationSender):

    def send(self, subject, html):
        logger.info("Notification skipped (no sender configured): %s", subject)


class SmtpSender(NotificationSender):

    def __init__(self, host, port, username, password, recipient, timeout=10):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.recipient = recipient
        self.timeout = timeout

    def send(self, subject, html):
        message = MIMEText(html, "html", "utf-8")
        message["Subject"] = subject
        message["From"] = self.username
        message["To"] = self.recipient

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.starttls()
                smtp.login(self.username, self.password)
                smtp.sendmail(self.username, [self.recipient], message.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"SMTP delivery failed: {e}") from e


class BrevoSender(NotificationSender):
    """Brevo (Sendinblue) transactional e-mail over its REST API."""

    def __init__(self, api_key, sender_email, recipient, sender_name="EPPI HR System",
                 timeout=10, session=None):
        self.api_key = api_key
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.recipient = recipient
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, subject, html):
        payload = {
            "sender": {"name": self.sender_name, "email": self.sender_email},
            "to": [{"email": self.recipient}],
            "subject": subject,
            "htmlContent": html,
        }
        headers = {"api-key": self.api_key, "accept": "application/json"}

        try:
            r = self.session.post(BREVO_SEND_URL, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise NotificationError(f"Brevo request failed: {e}") from e

        if r.status_code >= 300:
            raise NotificationError(f"Brevo answered {r.status_code}: {r.text[:500]}")
        logger.info("Brevo notification sent: %s", subject)


def build_notifier(config):
    kind = (config.get("NOTIFIER") or "none").lower()

    if kind == "none":
        return NullSender()
    if kind == "smtp":
        return SmtpSender(
            config["SMTP_HOST"],
            config["SMTP_PORT"],
            config.get("EMAIL_USER"),
            config.get("SMTP_PASSWORD"),
            config.get("ADMIN_EMAIL"),
        )
    if kind == "brevo":
        return BrevoSender(
            config.get("BREVO_API_KEY"),
            config.get("EMAIL_USER"),
            config.get("ADMIN_EMAIL"),
        )
    raise ValueError(f"Unknown NOTIFIER: {kind}")
