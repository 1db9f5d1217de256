"""Tests for response normalization into domain entities."""

import copy
from datetime import datetime, timezone

from discussions_core.gh.discussions import comment_from_node, discussion_from_node
from discussions_core.models import Author, DiscussionDetail, ListOptions

NODE = {
    "id": "D_1",
    "number": 3,
    "title": "Hello",
    "createdAt": "2024-03-01T08:30:00Z",
    "updatedAt": "2024-03-02T09:00:00Z",
    "url": "https://github.com/o/r/discussions/3",
    "locked": True,
    "comments": {"totalCount": 0},
    "author": {"login": "alice", "avatarUrl": None},
    "category": None,
}


class TestDiscussionFromNode:
    def test_normalizing_twice_yields_equal_values(self):
        assert discussion_from_node(NODE) == discussion_from_node(copy.deepcopy(NODE))

    def test_timestamps_are_aware_datetimes(self):
        d = discussion_from_node(NODE)
        assert d.created_at == datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc)
        assert d.updated_at.tzinfo is not None

    def test_deleted_author_becomes_ghost(self):
        node = {**NODE, "author": None}
        assert discussion_from_node(node).author == Author(login="ghost")

    def test_does_not_mutate_input(self):
        node = copy.deepcopy(NODE)
        discussion_from_node(node)
        assert node == NODE


class TestCommentFromNode:
    def test_comment_fields(self):
        comment = comment_from_node(
            {
                "id": "C_1",
                "body": "hi",
                "createdAt": "2024-03-01T08:30:00Z",
                "url": "u",
                "author": {"login": "bob"},
            }
        )
        assert comment.author == Author(login="bob", avatar_url=None)
        assert comment.body == "hi"


class TestDefaults:
    def test_list_options_defaults(self):
        options = ListOptions()
        assert options.first == 20
        assert options.after is None
        assert options.order_by.as_variables() == {"field": "UPDATED_AT", "direction": "DESC"}

    def test_detail_without_comments_is_not_truncated(self):
        base = discussion_from_node(NODE)
        detail = DiscussionDetail(**vars(base), body="b")
        assert detail.comments == ()
        assert detail.truncated is False
