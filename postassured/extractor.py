"""
Request semantics extraction.

Resolves the effective base URI, path, authentication, content type and
literal body of a Postman request. Every missing or malformed field falls
back to a fixed default; nothing in this module raises.
"""

import logging
import re
from typing import Optional
from urllib.parse import urlsplit

from .models import (
    BasicAuthSpec,
    BasicCredentials,
    BearerAuthSpec,
    BearerCredentials,
    ExtractedSemantics,
    FormDataBody,
    KeyValue,
    RawBody,
    RawUrl,
    RequestSpec,
    RequestUrl,
    StructuredUrl,
    UrlEncodedBody,
)


logger = logging.getLogger(__name__)

FALLBACK_BASE_URI = "http://localhost"
FALLBACK_PATH = "/"
DEFAULT_PROTOCOL = "https"
DEFAULT_HOST = "localhost"

# Stands in for {{variables}} so raw URLs always parse
URL_PLACEHOLDER = "placeholder"

DEFAULT_BEARER_TOKEN = "{{bearerToken}}"
DEFAULT_USERNAME = "{{username}}"
DEFAULT_PASSWORD = "{{password}}"

_TEMPLATE_VARIABLE = re.compile(r"\{\{[^}]+\}\}")
_BEARER_PREFIX = "bearer "

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_XML = "application/xml"
CONTENT_TYPE_MULTIPART = "multipart/form-data"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"


def resolve_url(url: Optional[RequestUrl]) -> tuple[str, str]:
    """
    Split a request URL into base URI and path.

    Returns:
        Tuple of (scheme://host[:port], path[?query])
    """
    if url is None:
        return FALLBACK_BASE_URI, FALLBACK_PATH

    if isinstance(url, StructuredUrl):
        protocol = url.protocol or DEFAULT_PROTOCOL
        host = ".".join(url.host) if url.host else DEFAULT_HOST
        port = f":{url.port}" if url.port else ""
        return f"{protocol}://{host}{port}", "/" + "/".join(url.path)

    return _resolve_raw_url(url)


def _resolve_raw_url(url: RawUrl) -> tuple[str, str]:
    substituted = _TEMPLATE_VARIABLE.sub(URL_PLACEHOLDER, url.raw.strip())
    try:
        parts = urlsplit(substituted)
        # Accessing .port validates it
        parts.port
    except ValueError as e:
        logger.debug("Could not parse URL %r (%s); using fallback", url.raw, e)
        return FALLBACK_BASE_URI, FALLBACK_PATH

    if not parts.scheme or not parts.netloc:
        logger.debug("URL %r has no scheme or host; using fallback", url.raw)
        return FALLBACK_BASE_URI, FALLBACK_PATH

    # Drop userinfo, keep host[:port]; host names are case-insensitive
    host = parts.netloc.rpartition("@")[2].lower()
    path = parts.path or "/"
    if parts.query:
        path += f"?{parts.query}"
    return f"{parts.scheme.lower()}://{host}", path


def _find_param(params: list[KeyValue], key: str) -> Optional[KeyValue]:
    for param in params:
        if param.key == key:
            return param
    return None


def _header_value(request: RequestSpec, name: str) -> tuple[bool, Optional[str]]:
    """Return (found, value) for the first header matching `name`."""
    for header in request.headers:
        if header.key and header.key.lower() == name:
            return True, header.value
    return False, None


def extract_bearer_token(request: RequestSpec) -> Optional[str]:
    """Find a bearer token in an `Authorization` header."""
    for header in request.headers:
        if header.key and header.key.lower() == "authorization":
            value = header.value or ""
            if value.lower().startswith(_BEARER_PREFIX):
                return value[len(_BEARER_PREFIX):]
    return None


def extract_auth(request: RequestSpec):
    """
    Resolve request credentials.

    An explicit bearer or basic descriptor wins; otherwise an
    `Authorization: Bearer ...` header is used.

    Returns:
        BearerCredentials, BasicCredentials, or None
    """
    auth = request.auth

    if isinstance(auth, BearerAuthSpec):
        entry = _find_param(auth.params, "token")
        token = entry.value if entry is not None and entry.value is not None else DEFAULT_BEARER_TOKEN
        return BearerCredentials(token=token)

    if isinstance(auth, BasicAuthSpec):
        user = _find_param(auth.params, "username")
        password = _find_param(auth.params, "password")
        return BasicCredentials(
            username=(user.value if user else None) or DEFAULT_USERNAME,
            password=(password.value if password else None) or DEFAULT_PASSWORD,
        )

    token = extract_bearer_token(request)
    if token:
        return BearerCredentials(token=token)
    return None


def resolve_content_type(request: RequestSpec) -> Optional[str]:
    """
    Resolve the request content type.

    An explicit `Content-Type` header always wins; otherwise the type is
    inferred from the body mode.
    """
    found, value = _header_value(request, "content-type")
    if found:
        return value or None

    body = request.body
    if isinstance(body, RawBody):
        if (body.language or "").lower() == "xml":
            return CONTENT_TYPE_XML
        return CONTENT_TYPE_JSON
    if isinstance(body, FormDataBody):
        return CONTENT_TYPE_MULTIPART
    if isinstance(body, UrlEncodedBody):
        return CONTENT_TYPE_FORM
    return None


def resolve_body(request: RequestSpec) -> Optional[str]:
    """Return the trimmed literal body of a raw-mode request, if any."""
    body = request.body
    if isinstance(body, RawBody):
        return body.raw.strip() or None
    return None


def extract_semantics(request: RequestSpec) -> ExtractedSemantics:
    """Resolve everything the code emitter needs for one request."""
    base_uri, path = resolve_url(request.url)
    return ExtractedSemantics(
        base_uri=base_uri,
        path=path,
        auth=extract_auth(request),
        content_type=resolve_content_type(request),
        body=resolve_body(request),
    )
