"""GraphQL documents used by the Discussions client.

Fragments keep the discussion/comment selections identical across list,
detail and mutation payloads so every node goes through the same normalizer.
"""

_AUTHOR = """
author {
  login
  avatarUrl
}
"""

DISCUSSION_FIELDS = (
    """
fragment DiscussionFields on Discussion {
  id
  number
  title
  createdAt
  updatedAt
  url
  locked
  comments {
    totalCount
  }
  %s
  category {
    id
    name
  }
}
"""
    % _AUTHOR
)

COMMENT_FIELDS = (
    """
fragment CommentFields on DiscussionComment {
  id
  body
  createdAt
  url
  %s
}
"""
    % _AUTHOR
)

LIST_DISCUSSIONS = (
    """
query GetDiscussions($owner: String!, $name: String!, $first: Int!, $after: String, $orderBy: DiscussionOrder) {
  repository(owner: $owner, name: $name) {
    discussions(first: $first, after: $after, orderBy: $orderBy) {
      nodes {
        ...DiscussionFields
      }
    }
  }
}
"""
    + DISCUSSION_FIELDS
)

GET_DISCUSSION = (
    """
query GetDiscussion($owner: String!, $name: String!, $number: Int!, $commentLimit: Int!) {
  repository(owner: $owner, name: $name) {
    discussion(number: $number) {
      ...DiscussionFields
      body
      commentPage: comments(first: $commentLimit) {
        nodes {
          ...CommentFields
        }
      }
    }
  }
}
"""
    + DISCUSSION_FIELDS
    + COMMENT_FIELDS
)

GET_CATEGORIES = """
query GetCategories($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    discussionCategories(first: 25) {
      nodes {
        id
        name
      }
    }
  }
}
"""

GET_REPOSITORY_ID = """
query GetRepositoryId($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    id
  }
}
"""

ADD_COMMENT = (
    """
mutation AddDiscussionComment($discussionId: ID!, $body: String!) {
  addDiscussionComment(input: {discussionId: $discussionId, body: $body}) {
    comment {
      ...CommentFields
    }
  }
}
"""
    + COMMENT_FIELDS
)

CREATE_DISCUSSION = (
    """
mutation CreateDiscussion($repositoryId: ID!, $categoryId: ID!, $title: String!, $body: String!) {
  createDiscussion(input: {repositoryId: $repositoryId, categoryId: $categoryId, title: $title, body: $body}) {
    discussion {
      ...DiscussionFields
    }
  }
}
"""
    + DISCUSSION_FIELDS
)
