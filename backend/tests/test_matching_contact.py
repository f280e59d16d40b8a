"""
Contact drafts go to the coordinator mailbox and require a signed-in sender.
"""
from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from identity_access.domain import Principal
from marketplace.models import Client, Tutor
from matching.contact import format_currency, sender_name, student_contact_draft, tutor_contact_draft

MAILBOX = "coordinator@example.org"


def test_format_currency():
    assert format_currency(40) == "$40.00"
    assert format_currency(1234.5) == "$1,234.50"


def test_sender_name_prefers_display_name():
    assert sender_name(Principal(id="1", email="ana@x.com", display_name="Ana A")) == "Ana A"
    assert sender_name(Principal(id="1", email="ana@x.com")) == "ana"
    assert sender_name(Principal(id="1")) == "User"


def test_contact_requires_sign_in():
    with pytest.raises(PermissionError, match="sign_in_required"):
        tutor_contact_draft(Tutor(name="Tom"), None, MAILBOX)


def test_tutor_contact_draft_has_subject_rate_and_fallback_bio():
    tutor = Tutor(name="Tom", subjects=["Physics", "Calculus"], pay=55)
    draft = tutor_contact_draft(tutor, Principal(id="1", email="ana@x.com", display_name="Ana"), MAILBOX)

    assert draft.to == MAILBOX
    assert draft.subject == "Tutoring Request - Tom"
    assert "- Subjects: Physics, Calculus\n" in draft.body
    assert "- Rate: $55.00/hr\n" in draft.body
    assert "- Bio: No bio provided\n" in draft.body
    assert draft.body.endswith("Best regards,\nAna")


def test_student_contact_draft_builds_mailto_url():
    client = Client(name="Sam Lee", email="sam@x.com", subjects=["MCAT"], budget=80, description="Needs help & fast")
    draft = student_contact_draft(client, Principal(id="2", email="tom@x.com"), MAILBOX)

    assert draft.subject == "Tutoring Opportunity - Sam Lee"
    assert "- Budget: $80.00/hr\n" in draft.body
    assert "- Description: Needs help & fast\n" in draft.body

    url = urlsplit(draft.mailto_url)
    assert url.scheme == "mailto"
    assert url.path == MAILBOX
    query = parse_qs(url.query)
    assert query["subject"] == [draft.subject]
    assert query["body"] == [draft.body]
