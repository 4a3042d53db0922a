"""Seed contacts for a fresh session.

Three threads that exercise each demo style: a friend, a boss, and
family. Used by the CLI and by tests.
"""

from datetime import datetime, timezone

from src.db.models import Contact, Message, Sender


def _thread(*lines: tuple[str, Sender, str]) -> tuple[Message, ...]:
    return tuple(
        Message(
            id=str(i),
            sender=sender,
            text=text,
            timestamp=datetime.fromisoformat(ts).replace(tzinfo=timezone.utc),
        )
        for i, (ts, sender, text) in enumerate(lines, 1)
    )


def seed_contacts() -> list[Contact]:
    """Build the default contact list, newest-first display order."""
    return [
        Contact(
            id="1",
            name="Sarah (Bestie)",
            avatar_url="https://picsum.photos/200/200?random=1",
            messages=_thread(
                ("2023-10-26T10:00:00", Sender.OTHER, "Omg did you see that?"),
                ("2023-10-26T10:01:00", Sender.SELF, "NO WHAT HAPPENED!!! 😱"),
                (
                    "2023-10-26T10:02:00",
                    Sender.OTHER,
                    "He literally just walked in wearing the same shirt.",
                ),
                ("2023-10-26T10:03:00", Sender.SELF, "LMAO stop rn 💀💀💀"),
                ("2023-10-26T10:04:00", Sender.OTHER, "Im dying inside help"),
                (
                    "2023-10-26T10:05:00",
                    Sender.SELF,
                    "Coming to rescue u, be there in 5 w coffee ☕️",
                ),
            ),
        ),
        Contact(
            id="2",
            name="Mr. Johnson (Boss)",
            avatar_url="https://picsum.photos/200/200?random=2",
            messages=_thread(
                ("2023-10-25T09:00:00", Sender.OTHER, "Can you send me the Q3 report?"),
                (
                    "2023-10-25T09:05:00",
                    Sender.SELF,
                    "Good morning, certainly. I will email that to you shortly.",
                ),
                (
                    "2023-10-25T09:10:00",
                    Sender.OTHER,
                    "Thanks. Also, are we still on for the 2pm meeting?",
                ),
                (
                    "2023-10-25T09:12:00",
                    Sender.SELF,
                    "Yes, I have the conference room booked. See you then.",
                ),
            ),
        ),
        Contact(
            id="3",
            name="Mom",
            avatar_url="https://picsum.photos/200/200?random=3",
            messages=_thread(
                ("2023-10-24T18:00:00", Sender.OTHER, "Call me when you can."),
                (
                    "2023-10-24T18:15:00",
                    Sender.SELF,
                    "Hey Mom! Just finishing up work. Is everything okay?",
                ),
                (
                    "2023-10-24T18:30:00",
                    Sender.OTHER,
                    "Yes just wanted to hear your voice love you",
                ),
                ("2023-10-24T18:31:00", Sender.SELF, "Love you too! Calling in 10 mins ❤️"),
            ),
        ),
    ]
