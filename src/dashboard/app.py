"""
Dashboard — Flask app serving the PSCMS JSON API and the operator UI.

JSON API:
    POST   /api/generate-content   {slug, prompt} -> {title, content, keywords}
    POST   /api/stats              {content, keywords} -> {word_count, keyword_density}
    GET    /api/posts              all posts, newest first
    POST   /api/posts              save a generated post
    DELETE /api/posts              {id}
    PUT    /api/posts/<id>         {content} -> post with recomputed stats
    DELETE /api/posts/<id>
    GET    /api/markdown           post metadata with markdown URLs
    GET    /api/markdown/<id>      full post, or raw markdown with ?markdownOnly=true

UI:
    GET  /                         create form + post list
    POST /generate                 generate a draft
    POST /drafts/edit              edit the draft body
    POST /drafts/save              save the draft as a post
    GET  /posts/<id>               rendered post
    GET|POST /posts/<id>/edit      edit a saved post
    POST /posts/<id>/delete

Health check: GET /health
"""

from __future__ import annotations

import json
from typing import Any

import markdown as md
from flask import Flask, Response, abort, jsonify, redirect, render_template, request, url_for
from markupsafe import Markup
from pydantic import ValidationError

from src.cms import PostService
from src.common.config import Settings
from src.common.errors import (
    GenerationError,
    InputValidationError,
    PostNotFoundError,
    PSCMSError,
)
from src.common.logging import setup_logging
from src.common.models import PostDraft
from src.content_writer import ContentWriter
from src.keyword_stats import compute_stats
from src.post_store import PostStore

log = setup_logging(module_name="dashboard")


def _json_error(message: str, status: int):
    return jsonify({"error": message}), status


def _request_json() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _validation_message(exc: ValidationError) -> str:
    """Client-facing summary of a rejected post payload."""
    errors = exc.errors()
    if all(err["type"] == "missing" for err in errors):
        return "Title and slug are required"
    parts = [
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
        for err in errors
        if err["type"] != "missing"
    ]
    return "Invalid post payload: " + "; ".join(parts)


def _render_markdown(text: str) -> Markup:
    """Markdown -> HTML for the post view."""
    return Markup(md.markdown(text or "", extensions=["tables", "fenced_code"]))


def _draft_from_form(form) -> PostDraft:
    """Rebuild a draft carried between requests in hidden form fields."""
    try:
        keywords = json.loads(form.get("keywords") or "[]")
    except json.JSONDecodeError as e:
        raise InputValidationError("Draft keywords are not valid JSON") from e
    if not isinstance(keywords, list):
        raise InputValidationError("Draft keywords must be a list")
    return PostDraft(
        title=form.get("title", ""),
        slug=form.get("slug", ""),
        content=form.get("content", ""),
        keywords=[str(k) for k in keywords],
        system_prompt=form.get("system_prompt") or None,
    )


def create_app(
    service: PostService | None = None,
    settings: Settings | None = None,
) -> Flask:
    """Build the dashboard app.

    Args:
        service: Post service to use; built from settings when omitted
        settings: Application settings; loaded from config/ when omitted
    """
    settings = settings or Settings.load()
    if service is None:
        service = PostService(
            writer=ContentWriter(settings=settings),
            store=PostStore(table=settings.supabase.posts_table),
        )

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.config["POST_SERVICE"] = service
    app.jinja_env.filters["markdown"] = _render_markdown

    # ── Health check ─────────────────────────────────────────────────────────

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "service": "pscms"})

    # ── Generation API ───────────────────────────────────────────────────────

    @app.route("/api/generate-content", methods=["POST"])
    def generate_content():
        data = _request_json()
        slug, prompt = data.get("slug"), data.get("prompt")

        if not isinstance(slug, str) or not isinstance(prompt, str) or not slug or not prompt:
            return _json_error("Slug and prompt are required", 400)

        try:
            result = service.writer.generate_post(slug, prompt)
        except InputValidationError as exc:
            return _json_error(str(exc), 400)
        except PSCMSError as exc:
            log.error("Error in generate-content API: %s", exc)
            return _json_error("Failed to generate content", 500)

        return jsonify(result.model_dump())

    @app.route("/api/stats", methods=["POST"])
    def stats():
        data = _request_json()
        content = data.get("content", "")
        keywords = data.get("keywords", [])
        if not isinstance(content, str) or not isinstance(keywords, list):
            return _json_error("Content must be a string and keywords a list", 400)

        result = compute_stats(content, [str(k) for k in keywords])
        return jsonify(result.model_dump())

    # ── Posts API ────────────────────────────────────────────────────────────

    @app.route("/api/posts", methods=["GET"])
    def list_posts():
        try:
            posts = service.list_posts()
        except PSCMSError as exc:
            log.error("Error fetching posts: %s", exc)
            return _json_error("Failed to fetch posts", 500)
        return jsonify([post.model_dump() for post in posts])

    @app.route("/api/posts", methods=["POST"])
    def create_post():
        data = _request_json()
        try:
            draft = PostDraft(**data)
            post = service.publish(draft)
        except ValidationError as exc:
            log.warning("Rejected post payload: %s", exc)
            return _json_error(_validation_message(exc), 400)
        except InputValidationError as exc:
            log.warning("Rejected post payload: %s", exc)
            return _json_error(str(exc), 400)
        except PSCMSError as exc:
            log.error("Error creating post: %s", exc)
            return _json_error("Failed to create post", 500)
        return jsonify(post.model_dump())

    @app.route("/api/posts", methods=["DELETE"])
    @app.route("/api/posts/<post_id>", methods=["DELETE"])
    def delete_post(post_id: str | None = None):
        post_id = post_id or _request_json().get("id")
        if not post_id:
            return _json_error("Post ID is required", 400)

        try:
            service.delete_post(str(post_id))
        except PSCMSError as exc:
            log.error("Error deleting post: %s", exc)
            return _json_error("Failed to delete post", 500)
        return jsonify({"success": True})

    @app.route("/api/posts/<post_id>", methods=["PUT"])
    def update_post(post_id: str):
        content = _request_json().get("content")
        if not content or not isinstance(content, str):
            return _json_error("Content is required", 400)

        try:
            post = service.update_content(post_id, content)
        except PostNotFoundError:
            return _json_error("Post not found", 404)
        except PSCMSError as exc:
            log.error("Error updating post %s: %s", post_id, exc)
            return _json_error("Failed to update post", 500)
        return jsonify(post.model_dump())

    # ── Markdown API ─────────────────────────────────────────────────────────

    @app.route("/api/markdown", methods=["GET"])
    def list_markdown():
        try:
            metadata = service.list_metadata()
        except PSCMSError as exc:
            log.error("Error fetching posts metadata: %s", exc)
            return _json_error("Failed to fetch posts metadata", 500)
        return jsonify([item.model_dump() for item in metadata])

    @app.route("/api/markdown/<post_id>", methods=["GET"])
    def get_markdown(post_id: str):
        markdown_only = request.args.get("markdownOnly") == "true"

        try:
            post = service.get_post(post_id)
        except PostNotFoundError:
            return _json_error("Post not found", 404)
        except PSCMSError as exc:
            log.error("Error fetching markdown: %s", exc)
            return _json_error("Failed to fetch markdown", 500)

        if markdown_only:
            return Response(post.content, mimetype="text/markdown")
        return jsonify(post.model_dump())

    # ── UI ───────────────────────────────────────────────────────────────────

    def _render_index(error: str | None = None, status: int = 200, **form):
        posts = []
        try:
            posts = service.list_posts()
        except PSCMSError as exc:
            log.error("Error loading posts: %s", exc)
            error = error or "Failed to load posts"
        return render_template("index.html", posts=posts, error=error, form=form), status

    @app.route("/", methods=["GET"])
    def index():
        return _render_index()

    @app.route("/generate", methods=["POST"])
    def generate():
        slug = request.form.get("slug", "")
        prompt = request.form.get("prompt", "")
        try:
            draft = service.generate_draft(slug, prompt)
        except InputValidationError as exc:
            return _render_index(str(exc), 400, slug=slug, prompt=prompt)
        except GenerationError as exc:
            log.error("Error generating post: %s", exc)
            return _render_index("Failed to generate content", 500, slug=slug, prompt=prompt)
        return render_template("draft.html", draft=draft, editing=False)

    @app.route("/drafts/edit", methods=["POST"])
    def edit_draft():
        try:
            draft = _draft_from_form(request.form)
        except InputValidationError as exc:
            return _render_index(str(exc), 400)

        new_content = request.form.get("new_content")
        if new_content is None:
            return render_template("draft.html", draft=service.refresh_stats(draft), editing=True)
        if not new_content:
            return render_template("draft.html", draft=service.refresh_stats(draft), editing=True), 400
        return render_template("draft.html", draft=service.edit_draft(draft, new_content), editing=False)

    @app.route("/drafts/save", methods=["POST"])
    def save_draft():
        try:
            draft = _draft_from_form(request.form)
            service.publish(draft)
        except InputValidationError as exc:
            return _render_index(str(exc), 400)
        except PSCMSError as exc:
            log.error("Error creating post: %s", exc)
            return _render_index("Failed to save post", 500)
        return redirect(url_for("index") + "#posts")

    @app.route("/posts/<post_id>", methods=["GET"])
    def view_post(post_id: str):
        try:
            post = service.get_post(post_id)
        except PostNotFoundError:
            abort(404)
        return render_template("post.html", post=post)

    @app.route("/posts/<post_id>/edit", methods=["GET", "POST"])
    def edit_post(post_id: str):
        try:
            post = service.get_post(post_id)
        except PostNotFoundError:
            abort(404)

        if request.method == "GET":
            return render_template("edit.html", post=post, error=None)

        content = request.form.get("content", "")
        try:
            service.update_content(post_id, content)
        except InputValidationError as exc:
            return render_template("edit.html", post=post, error=str(exc)), 400
        except PSCMSError as exc:
            log.error("Error updating post %s: %s", post_id, exc)
            return render_template("edit.html", post=post, error="Failed to update post"), 500
        return redirect(url_for("view_post", post_id=post_id))

    @app.route("/posts/<post_id>/delete", methods=["POST"])
    def delete_post_form(post_id: str):
        try:
            service.delete_post(post_id)
        except PSCMSError as exc:
            log.error("Error deleting post %s: %s", post_id, exc)
            return _render_index("Failed to delete post", 500)
        return redirect(url_for("index") + "#posts")

    return app
