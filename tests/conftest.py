from types import SimpleNamespace
from typing import Optional

import pytest

from fastapi_jsonapi_versioned.config import JSONAPISettings, get_settings
from fastapi_jsonapi_versioned.serializers.base import JSONAPISerializer, RelationshipField


class Author:
    def __init__(self, id: int, name: str) -> None:
        self.id = id
        self.name = name


class Comment:
    def __init__(self, id: int, body: str, author: Optional[Author] = None) -> None:
        self.id = id
        self.body = body
        self.author = author


class Post:
    def __init__(
        self,
        id: int,
        title: str,
        body: str = "",
        author: Optional[Author] = None,
        comments: Optional[list] = None,
    ) -> None:
        self.id = id
        self.title = title
        self.body = body
        self.author = author
        self.comments = comments if comments is not None else []


class Unregistered:
    def __init__(self, id: int) -> None:
        self.id = id
        self.label = "plain"


class V1:
    class AuthorSerializer(JSONAPISerializer):
        jsonapi_namespace = "API.V1"

        class Meta:
            type_ = "authors"
            fields = ["name"]

    class CommentSerializer(JSONAPISerializer):
        jsonapi_namespace = "API.V1"

        class Meta:
            type_ = "comments"
            fields = ["body"]

        author = RelationshipField()

    class PostSerializer(JSONAPISerializer):
        jsonapi_namespace = "API.V1"

        class Meta:
            type_ = "posts"
            fields = ["title"]

        author = RelationshipField(
            links={"related": lambda serializer: f"/v1/posts/{serializer.get_id()}/author"},
            meta=lambda serializer: {"post_title": serializer.object.title},
        )
        comments = RelationshipField(many=True)


class V2:
    class PostSerializer(JSONAPISerializer):
        jsonapi_namespace = "API.V2"

        class Meta:
            type_ = "posts"
            fields = ["title", "body"]

        author = RelationshipField(serializer="AuthorSerializer")

    class AuthorSerializer(JSONAPISerializer):
        jsonapi_namespace = "API.V2"

        class Meta:
            type_ = "writers"
            fields = ["name"]


@pytest.fixture
def settings() -> JSONAPISettings:
    return JSONAPISettings(isolated_namespace="API", optimize_relationships=False)


@pytest.fixture
def optimized_settings() -> JSONAPISettings:
    return JSONAPISettings(isolated_namespace="API", optimize_relationships=True)


@pytest.fixture
def author() -> Author:
    return Author(7, "Ada")


@pytest.fixture
def post(author: Author) -> Post:
    comments = [Comment(11, "first", author=author), Comment(12, "second")]
    return Post(1, "Hello", body="World", author=author, comments=comments)


@pytest.fixture
def controller() -> type:
    return type("PostsController", (), {"jsonapi_namespace": "API.V1"})


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def stub_serializer(instance, json_type: str = "things") -> SimpleNamespace:
    """Minimal serializer stand-in exposing what relationships read."""
    return SimpleNamespace(
        object=instance,
        json_type=json_type,
        get_id=lambda: "" if instance is None else str(instance.id),
    )
