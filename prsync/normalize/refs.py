"""Branch refs from REST head/base objects and GraphQL ref fields."""

from typing import Any, Dict

from prsync.models import Ref, RefRepository


def convert_rest_ref(data: Dict[str, Any] | None) -> Ref | None:
    """REST ``head``/``base`` to Ref; None when the repository is gone (deleted fork)."""
    if not data or not data.get("repo"):
        return None
    repo = data["repo"]
    owner = repo.get("owner") or {}
    return Ref(
        label=data.get("label") or "",
        ref=data.get("ref") or "",
        sha=data.get("sha") or "",
        repo=RefRepository(
            clone_url=repo.get("clone_url") or "",
            is_in_organization=bool(repo.get("organization")),
            owner=owner.get("login") or "",
            name=repo.get("name") or "",
        ),
    )


def parse_graphql_ref(ref_name: str | None, oid: str | None, repository: Dict[str, Any] | None) -> Ref | None:
    """Build a Ref from GraphQL ``*RefName``/``*RefOid``/``*Repository``; None without a repository."""
    if not repository:
        return None
    owner = (repository.get("owner") or {}).get("login") or ""
    ref_name = ref_name or ""
    return Ref(
        label=f"{owner}:{ref_name}",
        ref=ref_name,
        sha=oid or "",
        repo=RefRepository(
            clone_url=repository.get("url") or "",
            is_in_organization=bool(repository.get("isInOrganization")),
            owner=owner,
            name=repository.get("name") or "",
        ),
    )
