"""Example FastAPI blog serving JSON:API documents from in-memory models.

Run with:
    uvicorn examples.blog_app:app --reload
"""
from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import declarative_base, relationship
from starlette.responses import Response

from jsonapi_render import (
    JSONAPISerializer,
    JSONAPIViewSet,
    SerializerRegistry,
    configure_jsonapi,
)

Base = declarative_base()

post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", ForeignKey("posts.id"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id"), primary_key=True),
)


class Author(Base):
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    posts = relationship("Post", back_populates="author")


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    body = Column(String, nullable=False)
    author_id = Column(Integer, ForeignKey("authors.id"))
    author = relationship("Author", back_populates="posts")
    comments = relationship("Comment", back_populates="post")
    tags = relationship("Tag", secondary=post_tags)


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    body = Column(String, nullable=False)
    post_id = Column(Integer, ForeignKey("posts.id"))
    post = relationship("Post", back_populates="comments")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)


registry = SerializerRegistry()


@registry.register
class AuthorSerializer(JSONAPISerializer):
    class Meta:
        type_ = "authors"
        model = Author
        fields = ["id", "name"]


@registry.register
class PostSerializer(JSONAPISerializer):
    class Meta:
        type_ = "posts"
        model = Post
        fields = ["id", "title", "body"]


@registry.register
class CommentSerializer(JSONAPISerializer):
    class Meta:
        type_ = "comments"
        model = Comment
        fields = ["id", "body"]


@registry.register
class TagSerializer(JSONAPISerializer):
    class Meta:
        type_ = "tags"
        model = Tag
        fields = ["id", "name"]


def seed_example_data() -> dict[int, Post]:
    """Build a small object graph; nothing touches a database."""
    jane = Author(id=1, name="Jane Doe", email="jane@example.com")
    john = Author(id=2, name="John Smith", email="john@example.com")
    api = Tag(id=1, name="api")
    python = Tag(id=2, name="python")
    first = Post(
        id=1,
        title="JSON:API with FastAPI",
        body="Serializing documents.",
        author=jane,
        tags=[api, python],
        comments=[Comment(id=1, body="Great article!")],
    )
    second = Post(
        id=2,
        title="Sparse fieldsets",
        body="fields[posts]=title",
        author=john,
        tags=[api],
        comments=[],
    )
    return {post.id: post for post in (first, second)}


POSTS = seed_example_data()
AUTHORS = {post.author.id: post.author for post in POSTS.values()}

app = FastAPI(
    title="JSON:API Blog Example",
    description="Example API showcasing JSON:API document serialization.",
    version="0.1.0",
)
engine = configure_jsonapi(app, registry=registry)
viewset = JSONAPIViewSet(engine)


def get_post(post_id: int) -> Post:
    post = POSTS.get(post_id)
    if post is None:
        raise HTTPException(status_code=404, detail=f"Post {post_id} does not exist")
    return post


@app.get("/posts")
async def list_posts(request: Request) -> Response:
    return viewset.serialize_models_response(request, list(POSTS.values()))


@app.get("/posts/{post_id}")
async def retrieve_post(request: Request, post_id: int) -> Response:
    return viewset.serialize_model_response(request, get_post(post_id))


@app.get("/posts/{post_id}/relationships/author")
async def post_author_linkage(request: Request, post_id: int) -> Response:
    return viewset.render(viewset.serialize_linkage(request, get_post(post_id), "author"))


@app.patch("/posts/{post_id}/relationships/author")
async def update_post_author(request: Request, post_id: int) -> Response:
    post = get_post(post_id)
    payload = await viewset.deserialized_request_body(request)
    data = payload.get("data") or {}
    author = AUTHORS.get(int(data.get("id", 0)))
    updated = author is not None and author is not post.author
    if updated:
        post.author = author
    return viewset.serialize_linkage_response(request, post, "author", updated=updated)


@app.patch("/posts/{post_id}/relationships/tags")
async def update_post_tags(request: Request, post_id: int) -> Response:
    post = get_post(post_id)
    await viewset.deserialized_request_body(request)
    return viewset.serialize_linkages_response(
        request, post, "tags", updated=False, meta={"unchanged": True}
    )


@app.get("/search")
async def search_posts(request: Request, q: str = "") -> Response:
    matches = [post for post in POSTS.values() if q and q.lower() in post.title.lower()]
    return viewset.serialize_models_response(request, matches)


@app.get("/broken")
async def broken() -> Response:
    raise RuntimeError("database is on fire")
