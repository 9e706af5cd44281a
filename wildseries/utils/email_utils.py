# wildseries/utils/email_utils.py

from __future__ import annotations

"""
Wild Series · Notification Emails
=================================

HTML notifications sent when a program or an episode is published, via
**FastAPI-Mail** with bodies rendered from **Jinja2** templates.

Behavior
--------
- Recipient is the fixed `NOTIFY_EMAIL`; sender is `MAIL_FROM`.
- When SMTP is not configured (or in development without
  `EMAIL_SEND_IN_DEV`), messages are logged instead of sent.
- Senders are background-safe: failures are **logged**, never raised, so a
  broken mailer never fails the create request that triggered it.

Public API
----------
- render_email_template(name, **context) -> str
- send_html_email(to_email, subject, html)                 # async
- send_new_program_email(program)                          # async
- send_new_episode_email(episode)                          # async
"""

import logging
from typing import Any, Dict, Optional

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType
from jinja2 import Environment, FileSystemLoader, select_autoescape

from wildseries.core.config import settings

logger = logging.getLogger(__name__)

NEW_PROGRAM_SUBJECT = "Une nouvelle série vient d'être publiée !"
NEW_EPISODE_SUBJECT = "Un nouvel épisode vient d'être publié !"

# Lazy singletons for FastAPI-Mail + Jinja2
_fastmail: Optional[FastMail] = None
_jinja_env: Optional[Environment] = None


# ──────────────────────────────────────────────────────────────────────────────
# 🧰 Jinja environment
# ──────────────────────────────────────────────────────────────────────────────

def _jinja() -> Environment:
    global _jinja_env
    if _jinja_env is None:
        _jinja_env = Environment(
            loader=FileSystemLoader(str(settings.EMAIL_TEMPLATE_DIR)),
            autoescape=select_autoescape(enabled_extensions=("html", "xml")),
        )
    return _jinja_env


def render_email_template(name: str, **context: Any) -> str:
    """Render `name` from the email template folder with `context`."""
    return _jinja().get_template(name).render(project_name=settings.PROJECT_NAME, **context)


# ──────────────────────────────────────────────────────────────────────────────
# 📮 FastAPI-Mail configuration
# ──────────────────────────────────────────────────────────────────────────────

def _fastmail_client() -> FastMail:
    """Lazily build and cache the FastMail client."""
    global _fastmail
    if _fastmail is None:
        use_ssl = settings.SMTP_PORT == 465
        password = settings.SMTP_PASSWORD.get_secret_value() if settings.SMTP_PASSWORD else ""
        conf = ConnectionConfig(
            MAIL_USERNAME=settings.SMTP_USERNAME or "",
            MAIL_PASSWORD=password,
            MAIL_FROM=settings.MAIL_FROM,
            MAIL_FROM_NAME=settings.MAIL_FROM_NAME,
            MAIL_PORT=settings.SMTP_PORT,
            MAIL_SERVER=settings.SMTP_HOST or "localhost",
            MAIL_STARTTLS=not use_ssl,
            MAIL_SSL_TLS=use_ssl,
            USE_CREDENTIALS=bool(settings.SMTP_USERNAME and password),
        )
        _fastmail = FastMail(conf)
    return _fastmail


# ──────────────────────────────────────────────────────────────────────────────
# ✉️  Senders
# ──────────────────────────────────────────────────────────────────────────────

async def send_html_email(to_email: str, subject: str, html: str) -> bool:
    """
    Send one HTML message.

    Returns
    -------
    bool
        True when handed to the SMTP server, False for a dry run or a failure
        (both are logged).
    """
    if not settings.mail_enabled:
        logger.info("📨 [DRY-RUN] Email to=%s subject=%s", to_email, subject)
        return False

    message = MessageSchema(
        subject=subject,
        recipients=[to_email],
        body=html,
        subtype=MessageType.html,
    )
    try:
        await _fastmail_client().send_message(message)
    except Exception:
        logger.exception("❌ Email send failed (to=%s subject=%s)", to_email, subject)
        return False
    logger.info("📨 Email sent to %s (subject=%s)", to_email, subject)
    return True


async def send_new_program_email(program: Dict[str, Any]) -> bool:
    """Announce a newly published program to the notification address."""
    try:
        html = render_email_template("new_program.html", program=program)
    except Exception:
        logger.exception("Could not render new_program email (program=%s)", program.get("id"))
        return False
    return await send_html_email(settings.NOTIFY_EMAIL, NEW_PROGRAM_SUBJECT, html)


async def send_new_episode_email(episode: Dict[str, Any]) -> bool:
    """Announce a newly published episode to the notification address."""
    try:
        html = render_email_template("new_episode.html", episode=episode)
    except Exception:
        logger.exception("Could not render new_episode email (episode=%s)", episode.get("id"))
        return False
    return await send_html_email(settings.NOTIFY_EMAIL, NEW_EPISODE_SUBJECT, html)


__all__ = [
    "NEW_PROGRAM_SUBJECT",
    "NEW_EPISODE_SUBJECT",
    "render_email_template",
    "send_html_email",
    "send_new_program_email",
    "send_new_episode_email",
]
