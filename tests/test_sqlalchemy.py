import pytest
from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import declarative_base, relationship

from fastapi_jsonapi_versioned.rendering.renderer import DocumentRenderer
from fastapi_jsonapi_versioned.serializers.base import JSONAPISerializer

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"))
    author = relationship("User")
    tags = relationship("Tag")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    label = Column(String)
    article_id = Column(Integer, ForeignKey("articles.id"))


class ArticleSerializer(JSONAPISerializer):
    jsonapi_namespace = "API.V3"

    class Meta:
        type_ = "articles"
        fields = ["title"]


@pytest.fixture
def renderer(settings) -> DocumentRenderer:
    return DocumentRenderer("API.V3.ArticlesController", settings=settings)


def test_mapped_instances_are_valid_for_serialization():
    assert JSONAPISerializer.valid_for_serialization(Article(title="x"))
    assert not JSONAPISerializer.valid_for_serialization(Article)


def test_mapped_relationships_are_rendered(renderer):
    article = Article(id=1, title="Mapped", author=User(id=2, name="Kim"))
    document = renderer.render(article, include="author")

    assert renderer.serializer_for(article) is ArticleSerializer
    assert document["data"]["attributes"] == {"title": "Mapped"}
    assert document["data"]["relationships"] == {
        "author": {"data": {"type": "users", "id": "2"}},
        "tags": {"data": []},
    }
    assert document["included"] == [{"type": "users", "id": "2", "attributes": {"name": "Kim"}}]


def test_unloaded_relationships_render_empty_linkage(renderer):
    article = Article(id=4, title="Bare")
    relationships = renderer.render(article)["data"]["relationships"]
    assert relationships == {"author": {"data": None}, "tags": {"data": []}}


def test_loaded_collections(renderer):
    article = Article(id=5, title="Tagged", tags=[Tag(id=1, label="a"), Tag(id=2, label="b")])
    relationships = renderer.render(article)["data"]["relationships"]
    assert relationships["tags"] == {"data": [{"type": "tags", "id": "1"}, {"type": "tags", "id": "2"}]}
