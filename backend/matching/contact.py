"""
Pre-filled e-mail drafts for contacting a listing.

The marketplace does not expose addresses between users: drafts go to the
coordinator mailbox, which introduces both sides.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from identity_access.domain import Principal
from marketplace.models import Client, Tutor


@dataclass(frozen=True)
class ContactDraft:
    to: str
    subject: str
    body: str

    @property
    def mailto_url(self) -> str:
        return f"mailto:{self.to}?subject={quote(self.subject, safe='')}&body={quote(self.body, safe='')}"


def format_currency(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def sender_name(sender: Optional[Principal]) -> str:
    if sender is None:
        raise PermissionError("sign_in_required")
    if sender.display_name:
        return sender.display_name
    if sender.email:
        return sender.email.split("@", 1)[0]
    return "User"


def student_contact_draft(client: Client, sender: Optional[Principal], mailbox: str) -> ContactDraft:
    """Draft sent by a tutor who wants to teach `client`."""
    name = sender_name(sender)
    body = (
        "Hello,\n\n"
        f"I'm interested in connecting with {client.name} for tutoring services.\n\n"
        "Student Details:\n"
        f"- Name: {client.name}\n"
        f"- Subjects of interest: {', '.join(client.subjects)}\n"
        f"- Budget: {format_currency(client.budget)}/hr\n"
        f"- Description: {client.description or 'No description provided'}\n\n"
        "Please help me get in touch with this student to discuss:\n"
        "- My availability for tutoring sessions\n"
        "- My experience with their subjects of interest\n"
        "- Preferred meeting format (in-person/online)\n"
        "- Scheduling and session details\n\n"
        "Thank you!\n\n"
        "Best regards,\n"
        f"{name}"
    )
    return ContactDraft(to=mailbox, subject=f"Tutoring Opportunity - {client.name}", body=body)


def tutor_contact_draft(tutor: Tutor, sender: Optional[Principal], mailbox: str) -> ContactDraft:
    """Draft sent by a student who wants lessons from `tutor`."""
    name = sender_name(sender)
    body = (
        "Hello,\n\n"
        f"I'm interested in booking tutoring sessions with {tutor.name}.\n\n"
        "Tutor Details:\n"
        f"- Name: {tutor.name}\n"
        f"- Subjects: {', '.join(tutor.subjects)}\n"
        f"- Rate: {format_currency(tutor.pay)}/hr\n"
        f"- Bio: {tutor.bio or 'No bio provided'}\n\n"
        "Please help me get in touch with this tutor to discuss:\n"
        "- Their availability for tutoring sessions\n"
        "- The subjects I need help with\n"
        "- Preferred meeting format (in-person/online)\n"
        "- Scheduling and session details\n\n"
        "Thank you!\n\n"
        "Best regards,\n"
        f"{name}"
    )
    return ContactDraft(to=mailbox, subject=f"Tutoring Request - {tutor.name}", body=body)


__all__ = ["ContactDraft", "format_currency", "sender_name", "student_contact_draft", "tutor_contact_draft"]
