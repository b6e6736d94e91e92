"""HTTP plumbing, JSON file helpers and a small application service host."""

from __future__ import annotations

import json
import logging
import os
import re
import uuid
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Callable

log = logging.getLogger(__name__)

CONTENT_TYPE_STRING = "string"
CONTENT_TYPE_JSON = "json"
SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH"})


class ServiceError(Exception):
    """Raised when a service operation or a JSON file operation fails."""


@dataclass
class Request:
    """An incoming request with its path variables already extracted."""

    method: str = "GET"
    path: str = "/"
    vars: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class Response:
    """A finished response ready to be sent to a client."""

    status_code: int
    body: bytes = b""
    content_type: str = "application/json"


Handler = Callable[[Request], Response]


@dataclass
class HTTPResponse:
    """The envelope every endpoint answers with."""

    content: Any = ""
    content_type: str = CONTENT_TYPE_STRING
    status_code: int = 200
    error: bool = False

    def set_string(self, status_code: int, content: str, error: bool) -> None:
        """Fill the envelope with a plain string payload."""
        self.content = content
        self.content_type = CONTENT_TYPE_STRING
        self.status_code = status_code
        self.error = error

    def set_json(self, status_code: int, content: str, error: bool) -> None:
        """Fill the envelope with an already serialized JSON payload."""
        self.content = content
        self.content_type = CONTENT_TYPE_JSON
        self.status_code = status_code
        self.error = error

    def to_response(self) -> Response:
        """Serialize the envelope into a response."""
        payload = {
            "content": self.content,
            "contentType": self.content_type,
            "statusCode": self.status_code,
            "error": self.error,
        }
        body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        return Response(status_code=self.status_code, body=body)


def string_response(status_code: int, content: str, error: bool) -> Response:
    """Build a response carrying a string payload."""
    envelope = HTTPResponse()
    envelope.set_string(status_code, content, error)
    return envelope.to_response()


def json_response(status_code: int, content: str, error: bool) -> Response:
    """Build a response carrying a serialized JSON payload."""
    envelope = HTTPResponse()
    envelope.set_json(status_code, content, error)
    return envelope.to_response()


def _encode_default(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"{type(obj).__name__} is not JSON serializable")


def to_json(obj: Any) -> str:
    """Serialize an object to compact JSON; objects may provide to_dict()."""
    try:
        return json.dumps(obj, default=_encode_default, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise ServiceError(f"failed to serialize to JSON: {exc}") from exc


def load_json_file(path: str | os.PathLike[str]) -> Any:
    """Read and parse a JSON file."""
    try:
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)
    except OSError as exc:
        raise ServiceError(f"failed to read {os.fspath(path)}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ServiceError(f"invalid JSON in {os.fspath(path)}: {exc}") from exc


def write_json_file(path: str | os.PathLike[str], content: Any) -> None:
    """Serialize content and write it to a file with mode 0644."""
    data = to_json(content)
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(data)
    except OSError as exc:
        raise ServiceError(f"failed to write {os.fspath(path)}: {exc}") from exc


def gen_uuid() -> str:
    """Return a new random UUID as a string."""
    return str(uuid.uuid4())


_VAR_SEGMENT = re.compile(r"^\{([A-Za-z_][A-Za-z0-9_]*)\}$")


def _compile_path(path: str) -> re.Pattern[str]:
    parts = []
    for segment in path.split("/"):
        match = _VAR_SEGMENT.match(segment)
        if match:
            parts.append(f"(?P<{match.group(1)}>[^/]+)")
        else:
            parts.append(re.escape(segment))
    return re.compile("/".join(parts))


@dataclass
class _Route:
    template: str
    pattern: re.Pattern[str]
    method: str
    handler: Handler


class AppService:
    """Hosts named routes and application settings for one service."""

    def __init__(self, service_key: str, settings: dict[str, str] | None = None):
        if not service_key:
            raise ServiceError("service key must not be empty")
        self.service_key = service_key
        self.settings: dict[str, str] = dict(settings or {})
        self._routes: list[_Route] = []

    def add_route(self, path: str, handler: Handler, *args: str) -> None:
        """Register a handler for a path template and one or more methods."""
        if not args:
            raise ServiceError(f"no HTTP method given for route {path}")
        for method in args:
            method = method.upper()
            if method not in SUPPORTED_METHODS:
                raise ServiceError(f"unsupported HTTP method {method} for route {path}")
            if any(r.template == path and r.method == method for r in self._routes):
                raise ServiceError(f"route {method} {path} is already registered")
            self._routes.append(_Route(path, _compile_path(path), method, handler))

    def get_app_setting(self, key: str) -> str:
        """Return an application setting, raising if it is absent."""
        try:
            return self.settings[key]
        except KeyError:
            raise ServiceError(
                f"setting {key!r} not found in application settings"
            ) from None

    def dispatch(self, method: str, path: str, body: bytes = b"") -> Response:
        """Route a request to its handler and return the handler's response."""
        method = method.upper()
        path = path.split("?", 1)[0]
        path_matched = False
        for route in self._routes:
            match = route.pattern.fullmatch(path)
            if not match:
                continue
            path_matched = True
            if route.method != method:
                continue
            request = Request(
                method=method,
                path=path,
                vars=match.groupdict(),
                body=body,
            )
            return route.handler(request)
        if path_matched:
            return string_response(405, f"method {method} not allowed for {path}", True)
        return string_response(404, f"no route for {path}", True)

    def make_it_run(self, host: str = "0.0.0.0", port: int = 48080) -> None:
        """Serve the registered routes over HTTP until interrupted."""
        service = self

        class _RequestHandler(BaseHTTPRequestHandler):
            def _handle(self) -> None:
                length = int(self.headers.get("Content-Length") or 0)
                body = self.rfile.read(length) if length else b""
                try:
                    response = service.dispatch(self.command, self.path, body)
                except Exception as exc:  # noqa: BLE001 - report to the client
                    log.exception("handler failed")
                    response = string_response(500, f"internal error: {exc}", True)
                self.send_response(response.status_code)
                self.send_header("Content-Type", response.content_type)
                self.send_header("Content-Length", str(len(response.body)))
                self.end_headers()
                if response.status_code != 304:
                    self.wfile.write(response.body)

            do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = _handle

            def log_message(self, format: str, *args: Any) -> None:
                log.info("%s: " + format, service.service_key, *args)

        try:
            server = ThreadingHTTPServer((host, port), _RequestHandler)
        except OSError as exc:
            raise ServiceError(f"failed to listen on {host}:{port}: {exc}") from exc
        log.info("%s listening on %s:%d", self.service_key, host, port)
        with server:
            try:
                server.serve_forever()
            except KeyboardInterrupt:
                log.info("%s shutting down", self.service_key)