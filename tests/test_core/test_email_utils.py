# tests/test_core/test_email_utils.py

import pytest

import wildseries.utils.email_utils as mod


PROGRAM = {
    "id": "0b0e6c33-3f1c-4c44-9a4e-3f0f7f2f9f11",
    "title": "Walking Dead",
    "slug": "walking-dead",
    "summary": "Des zombies envahissent la terre.",
    "poster": "https://example.com/poster.jpg",
}

EPISODE = {
    "id": "2f6a0a3e-1a6e-4f59-9d69-6c2b7d7e8a01",
    "title": "Days Gone Bye",
    "slug": "days-gone-bye",
    "number": 1,
    "synopsis": "Rick se réveille à l'hôpital.",
}


def test_render_new_program_template():
    html = mod.render_email_template("new_program.html", program=PROGRAM)
    assert "Walking Dead" in html
    assert "/programs/walking-dead" in html
    assert mod.settings.PROJECT_NAME in html


def test_render_escapes_html():
    html = mod.render_email_template("new_program.html", program={**PROGRAM, "title": "<b>x</b>"})
    assert "<b>x</b>" not in html
    assert "&lt;b&gt;x&lt;/b&gt;" in html


@pytest.mark.anyio
async def test_send_html_email_dry_run_without_smtp(monkeypatch):
    monkeypatch.setattr(mod.settings, "SMTP_HOST", None)
    assert await mod.send_html_email("a@example.com", "s", "<p>x</p>") is False


@pytest.mark.anyio
async def test_send_failure_is_logged_not_raised(monkeypatch):
    class _Boom:
        async def send_message(self, _msg):
            raise RuntimeError("smtp down")

    monkeypatch.setattr(mod.settings, "SMTP_HOST", "smtp.example.com")
    monkeypatch.setattr(mod.settings, "ENV", "production")
    monkeypatch.setattr(mod, "_fastmail_client", lambda: _Boom())
    assert await mod.send_html_email("a@example.com", "s", "<p>x</p>") is False


@pytest.mark.anyio
async def test_new_program_email_subject_and_recipient(monkeypatch):
    sent = []

    async def _capture(to_email, subject, html):
        sent.append((to_email, subject, html))
        return True

    monkeypatch.setattr(mod, "send_html_email", _capture)
    assert await mod.send_new_program_email(PROGRAM) is True
    to_email, subject, html = sent[0]
    assert to_email == mod.settings.NOTIFY_EMAIL
    assert subject == "Une nouvelle série vient d'être publiée !"
    assert "Walking Dead" in html


@pytest.mark.anyio
async def test_new_episode_email_subject(monkeypatch):
    sent = []

    async def _capture(to_email, subject, html):
        sent.append(subject)
        return True

    monkeypatch.setattr(mod, "send_html_email", _capture)
    await mod.send_new_episode_email(EPISODE)
    assert sent == ["Un nouvel épisode vient d'être publié !"]
