"""Test doubles and HTTP helpers shared by the service tests.

RecordingNotifier replaces the SMTP notifier on app.state; signed_in_headers
walks a user through register -> verify -> login.
"""

from dataclasses import dataclass, field
from urllib.parse import parse_qs, urlparse

PASSWORD = "Secret1!"


@dataclass
class SentMail:
    to: str
    name: str | None
    link: str

    @property
    def token(self) -> str:
        return parse_qs(urlparse(self.link).query)["token"][0]


@dataclass
class RecordingNotifier:
    """Stands in for SMTP: records every verification mail."""
    sent: list[SentMail] = field(default_factory=list)
    deliver: bool = True

    async def send_verification(self, to: str, name: str | None, link: str) -> bool:
        self.sent.append(SentMail(to=to, name=name, link=link))
        return self.deliver

    def sent_to(self, email: str) -> list[SentMail]:
        return [m for m in self.sent if m.to == email]

    def last_token_for(self, email: str) -> str:
        return self.sent_to(email)[-1].token


async def register(client, email: str, password: str = PASSWORD, name: str = "Alex Doe"):
    return await client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": password, "name": name},
    )


async def login(client, email: str, password: str = PASSWORD):
    return await client.post(
        "/api/v1/auth/login", json={"email": email, "password": password},
    )


async def signed_in_headers(
    client, notifier: RecordingNotifier, email: str, password: str = PASSWORD,
) -> dict[str, str]:
    """Register, verify and log in; returns an Authorization header."""
    res = await register(client, email, password)
    assert res.status_code == 201
    res = await client.get(
        "/api/v1/auth/verify-email",
        params={"token": notifier.last_token_for(email)},
    )
    assert res.status_code == 200
    res = await login(client, email, password)
    assert res.status_code == 200
    session_token = res.cookies["token"]
    client.cookies.clear()
    return {"Authorization": f"Bearer {session_token}"}
