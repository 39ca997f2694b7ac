"""Author normalization: never let a null author past this module."""

from typing import Any, Dict

from prsync.models import Account, ghost_account


def parse_author(data: Dict[str, Any] | None) -> Account:
    """GraphQL actor/author to Account; a missing author becomes the ghost account."""
    if not data:
        return ghost_account()
    return Account(
        login=data.get("login") or "",
        url=data.get("url") or "",
        avatar_url=data.get("avatarUrl"),
        email=data.get("email"),
        name=data.get("name"),
    )


def convert_rest_user(data: Dict[str, Any] | None) -> Account:
    """REST user to Account. A null email is kept as an empty string."""
    if not data:
        return ghost_account()
    email = data.get("email")
    return Account(
        login=data.get("login") or "",
        url=data.get("html_url") or "",
        avatar_url=data.get("avatar_url"),
        email="" if email is None else email,
        name=data.get("name"),
    )
