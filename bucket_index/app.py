from __future__ import annotations
"""Flask application serving bucket listings and object downloads."""
import logging
from urllib.parse import quote

from flask import Flask, Response, request

from .listing import ListingNotFoundError, Storage, build_listing
from .models import InvariantViolationError, ObjectBody
from .renderer import render
from .router import FetchObject, ListDirectory, Reject, route
from .settings import AppSettings

LOGGER = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
ACCEPTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _plain(message: str, status: int) -> Response:
    return Response(message, status=status, content_type="text/plain; charset=utf-8")


def _raw_request_path() -> str:
    # PATH_INFO holds the decoded request bytes as latin-1; re-quote them so
    # the router sees the path as it arrived on the wire.
    path_info = request.environ.get("PATH_INFO", "/")
    return quote(path_info.encode("latin-1"), safe="/")


def _stream_body(body: ObjectBody):
    stream = body.stream
    try:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    finally:
        stream.close()


def create_app(storage: Storage, settings: AppSettings | None = None) -> Flask:
    settings = settings or AppSettings()
    size_format_options = settings.size_format_options()

    app = Flask(__name__)
    # Storage keys are served verbatim, so repeated slashes must reach the view.
    app.url_map.merge_slashes = False

    @app.errorhandler(ListingNotFoundError)
    def _listing_not_found(exc: ListingNotFoundError) -> Response:
        LOGGER.debug("%s", exc)
        return _plain("Not Found.", 404)

    @app.errorhandler(InvariantViolationError)
    def _invariant_violation(exc: InvariantViolationError) -> Response:
        LOGGER.error("Storage contract violated while serving %s", request.path, exc_info=exc)
        return _plain("Internal Server Error", 500)

    def browse(path: str = "") -> Response:
        operation = route(request.method, _raw_request_path())
        if isinstance(operation, Reject):
            return _plain(operation.reason, operation.status)
        if isinstance(operation, ListDirectory):
            listing = build_listing(storage, operation.prefix, operation.display_prefix)
            document = render(
                listing.query_prefix,
                listing.display_prefix,
                listing.entries,
                size_format_options,
            )
            return Response(document, status=200, content_type="text/html; charset=utf-8")
        if isinstance(operation, FetchObject):
            return _fetch(operation.key)
        raise InvariantViolationError(f"Unhandled operation {operation!r}")

    def _fetch(key: str) -> Response:
        body = storage.get(key)
        if body is None:
            return _plain("Not Found", 404)
        if body.stream is None:
            raise InvariantViolationError(f"Object '{key}' has no body")
        response = Response(
            _stream_body(body),
            status=200,
            content_type=body.content_type or "application/octet-stream",
        )
        if body.content_length is not None:
            response.content_length = body.content_length
        return response

    app.add_url_rule(
        "/",
        "browse_root",
        browse,
        methods=ACCEPTED_METHODS,
        provide_automatic_options=False,
    )
    app.add_url_rule(
        "/<path:path>",
        "browse",
        browse,
        methods=ACCEPTED_METHODS,
        provide_automatic_options=False,
    )
    return app
