"""GitHub Discussions GraphQL client.

Each public method is a single intent (list, fetch, comment, create) and
performs no retries; ResilientExecutor owns the retry policy. Whatever goes
wrong inside a method leaves it as an AppError.
"""

from __future__ import annotations

import functools
import logging
from datetime import datetime
from typing import Any, Callable, TypeVar

import httpx

from discussions_core.errors import (
    ApiError,
    AppError,
    GraphQLResponseError,
    ValidationError,
    authentication_error,
    classify_error,
    parse_repo,
)
from discussions_core.gh import queries
from discussions_core.models import Author, Category, Comment, Discussion, DiscussionDetail, ListOptions

logger = logging.getLogger(__name__)

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"
DEFAULT_COMMENT_LIMIT = 100
_USER_AGENT = "gh-discussions-cli"

T = TypeVar("T")


# ---------------------------------------------------------------------- #
# Normalization                                                           #
# ---------------------------------------------------------------------- #


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _author_from_node(node: dict | None) -> Author:
    # Deleted accounts come back as null; GitHub renders them as "ghost".
    if node is None:
        return Author(login="ghost")
    return Author(login=node["login"], avatar_url=node.get("avatarUrl"))


def category_from_node(node: dict | None) -> Category | None:
    if node is None:
        return None
    return Category(id=node["id"], name=node["name"])


def comment_from_node(node: dict) -> Comment:
    return Comment(
        id=node["id"],
        author=_author_from_node(node.get("author")),
        body=node["body"],
        created_at=_parse_timestamp(node["createdAt"]),
        url=node["url"],
    )


def _discussion_fields(node: dict) -> dict[str, Any]:
    return {
        "id": node["id"],
        "number": node["number"],
        "title": node["title"],
        "author": _author_from_node(node.get("author")),
        "created_at": _parse_timestamp(node["createdAt"]),
        "updated_at": _parse_timestamp(node["updatedAt"]),
        "comment_count": node["comments"]["totalCount"],
        "url": node["url"],
        "locked": node["locked"],
        "category": category_from_node(node.get("category")),
    }


def discussion_from_node(node: dict) -> Discussion:
    return Discussion(**_discussion_fields(node))


def discussion_detail_from_node(node: dict) -> DiscussionDetail:
    comments = tuple(comment_from_node(c) for c in node["commentPage"]["nodes"])
    return DiscussionDetail(**_discussion_fields(node), body=node["body"], comments=comments)


def _normalizes(method: Callable[..., T]) -> Callable[..., T]:
    """Convert any failure raised by a client operation into an AppError.

    A missing key or wrong type while reading the payload means the response
    did not have the expected shape, which is reported as an API error.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except AppError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"Unexpected response shape from GitHub: {e!r}", details=repr(e)) from e
        except Exception as e:
            raise classify_error(e) from e

    return wrapper


class DiscussionsClient:
    """Typed access to the GitHub Discussions GraphQL API.

    The credential is bound once into the session headers; there is no
    per-call override. ``transport`` lets tests swap in an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        token: str,
        api_url: str = GITHUB_GRAPHQL_URL,
        comment_limit: int = DEFAULT_COMMENT_LIMIT,
        transport: httpx.BaseTransport | None = None,
    ):
        self._api_url = api_url
        self.comment_limit = comment_limit
        # No timeout: a hang below this layer surfaces only when the transport errors.
        self._http = httpx.Client(
            headers={
                "Authorization": f"token {token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": _USER_AGENT,
            },
            timeout=None,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> DiscussionsClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    @_normalizes
    def list_discussions(self, repo_id: str, options: ListOptions | None = None) -> list[Discussion]:
        """Return one page of discussions for ``owner/name``."""
        owner, name = parse_repo(repo_id)
        options = options or ListOptions()
        data = self._execute(
            queries.LIST_DISCUSSIONS,
            {
                "owner": owner,
                "name": name,
                "first": options.first,
                "after": options.after,
                "orderBy": options.order_by.as_variables(),
            },
        )
        repository = self._repository(data, repo_id)
        return [discussion_from_node(node) for node in repository["discussions"]["nodes"]]

    @_normalizes
    def get_discussion(self, repo_id: str, discussion_number: str | int) -> DiscussionDetail:
        """Fetch a discussion by its number, with up to ``comment_limit`` comments."""
        owner, name = parse_repo(repo_id)
        number = _parse_number(discussion_number)
        data = self._execute(
            queries.GET_DISCUSSION,
            {"owner": owner, "name": name, "number": number, "commentLimit": self.comment_limit},
        )
        node = self._repository(data, repo_id)["discussion"]
        if node is None:
            raise ApiError(f"Discussion #{number} not found in {repo_id}")
        return discussion_detail_from_node(node)

    @_normalizes
    def create_comment(self, repo_id: str, discussion_id: str, body: str) -> Comment:
        """Reply to a discussion.

        ``discussion_id`` is the opaque node id from a prior fetch, not the
        discussion number.
        """
        parse_repo(repo_id)
        if not body or not body.strip():
            raise ValidationError("Comment body cannot be empty")
        data = self._execute(queries.ADD_COMMENT, {"discussionId": discussion_id, "body": body})
        return comment_from_node(data["addDiscussionComment"]["comment"])

    @_normalizes
    def create_discussion(self, repo_id: str, title: str, body: str, category_id: str | None = None) -> Discussion:
        """Open a new discussion, defaulting to the "General" category."""
        owner, name = parse_repo(repo_id)
        if category_id is None:
            category_id = self._default_category(repo_id).id

        repo_data = self._execute(queries.GET_REPOSITORY_ID, {"owner": owner, "name": name})
        repository_id = self._repository(repo_data, repo_id)["id"]

        data = self._execute(
            queries.CREATE_DISCUSSION,
            {"repositoryId": repository_id, "categoryId": category_id, "title": title, "body": body},
        )
        return discussion_from_node(data["createDiscussion"]["discussion"])

    @_normalizes
    def list_categories(self, repo_id: str) -> list[Category]:
        owner, name = parse_repo(repo_id)
        data = self._execute(queries.GET_CATEGORIES, {"owner": owner, "name": name})
        nodes = self._repository(data, repo_id)["discussionCategories"]["nodes"]
        return [category_from_node(node) for node in nodes]

    # ------------------------------------------------------------------ #
    # Internals                                                            #
    # ------------------------------------------------------------------ #

    def _default_category(self, repo_id: str) -> Category:
        categories = self.list_categories(repo_id)
        if not categories:
            raise ApiError(
                f"No discussion categories found for {repo_id}",
                suggestions=["Check if Discussions are enabled for the repository"],
            )
        for category in categories:
            if category.name.lower() == "general":
                return category
        return categories[0]

    @staticmethod
    def _repository(data: dict, repo_id: str) -> dict:
        repository = data.get("repository")
        if repository is None:
            raise ApiError(f"Repository {repo_id} not found")
        return repository

    def _execute(self, query: str, variables: dict) -> dict:
        """POST one GraphQL document and return its ``data`` payload."""
        logger.debug("GraphQL request to %s with variables %s", self._api_url, variables)
        response = self._http.post(self._api_url, json={"query": query, "variables": variables})

        if response.status_code == 401:
            raise authentication_error()

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and payload.get("errors"):
            raise GraphQLResponseError(payload["errors"], status_code=response.status_code)

        if response.status_code >= 400:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise ApiError(
                f"GitHub API returned HTTP {response.status_code}: {message or response.reason_phrase}",
                details={"status": response.status_code, "body": response.text[:500]},
            )

        if not isinstance(payload, dict) or payload.get("data") is None:
            raise ApiError("GitHub API returned no data", details={"body": response.text[:500]})
        return payload["data"]


def _parse_number(discussion_number: str | int) -> int:
    try:
        number = int(str(discussion_number).strip().lstrip("#"))
    except ValueError:
        raise ValidationError(
            f"Invalid discussion number: {discussion_number!r}",
            suggestions=["Discussions are addressed by their number, e.g. 42"],
        ) from None
    if number <= 0:
        raise ValidationError(f"Invalid discussion number: {discussion_number!r}")
    return number
