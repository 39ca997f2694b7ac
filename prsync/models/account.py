"""Accounts and teams, the two kinds of reviewer."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

# Login used for the sentinel account when upstream author data is missing
GHOST_LOGIN = ""


class Account(BaseModel):
    """User or bot account as seen by either API."""

    kind: Literal["user"] = "user"
    login: str
    url: str
    avatar_url: str | None = None
    email: str | None = None
    name: str | None = None

    def identity(self) -> str:
        """Key used to deduplicate reviewers."""
        return self.login

    def display_label(self) -> str:
        return self.login

    @property
    def is_ghost(self) -> bool:
        return self.login == GHOST_LOGIN and not self.url


class Team(BaseModel):
    """Organization team that can be asked for a review."""

    kind: Literal["team"] = "team"
    name: str
    id: str = ""
    slug: str | None = None
    org: str | None = None
    url: str | None = None
    avatar_url: str | None = None

    def identity(self) -> str:
        return self.name

    def display_label(self) -> str:
        return self.name or self.slug or ""


Reviewer = Annotated[Union[Account, Team], Field(discriminator="kind")]


def ghost_account() -> Account:
    """Return a fresh sentinel account (empty login and url)."""
    return Account(login=GHOST_LOGIN, url="")
