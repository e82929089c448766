"""
Postman Collection loading for postassured.

This module turns Postman Collection v2.0/v2.1 documents into the typed
collection tree defined in :mod:`postassured.models`:
- Load a collection file and validate its schema version
- Normalize the version-variant shapes (string or object URLs, list or
  string headers, list or mapping auth parameters, bare-string requests)
- Flatten the folder tree into an ordered list of requests

Example usage:
    parser = PostmanParser('collection.json')
    collection = parser.parse()
    for flat in flatten_items(collection.items):
        print(flat.folder_name, flat.name, flat.request.method)
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from .models import (
    DEFAULT_COLLECTION_NAME,
    BasicAuthSpec,
    BearerAuthSpec,
    BodySpec,
    Collection,
    FlatRequest,
    Folder,
    FormDataBody,
    Header,
    KeyValue,
    OtherAuthSpec,
    OtherBody,
    RawBody,
    RawUrl,
    RequestItem,
    RequestSpec,
    RequestUrl,
    StructuredUrl,
    UrlEncodedBody,
    AuthSpec,
)


logger = logging.getLogger(__name__)


class PostmanParseError(Exception):
    """Raised when Postman collection cannot be parsed."""
    pass


class PostmanAuthType(str):
    """Postman authentication types with a dedicated rendering."""
    NOAUTH = "noauth"
    BEARER = "bearer"
    BASIC = "basic"


class PostmanBodyMode(str):
    """Postman body modes."""
    RAW = "raw"
    FORMDATA = "formdata"
    URLENCODED = "urlencoded"


class PostmanParser:
    """
    Parser for Postman Collection v2.0 and v2.1 formats.

    Example:
        parser = PostmanParser('my_collection.json')
        collection = parser.parse()
        print(collection.name, len(flatten_items(collection.items)))
    """

    def __init__(self, collection_path: Union[str, Path]):
        """
        Initialize parser with path to Postman collection file.

        Args:
            collection_path: Path to Postman collection JSON file
        """
        self.collection_path = Path(collection_path)
        self.collection: dict[str, Any] = {}

    def parse(self) -> Collection:
        """
        Load the collection file and return the typed collection tree.

        Raises:
            PostmanParseError: If the file is missing, not JSON, or not a
                supported Postman collection
        """
        self._load_collection()
        return parse_collection(self.collection)

    def _load_collection(self) -> None:
        """Load the collection from file."""
        if not self.collection_path.exists():
            raise PostmanParseError(f"Collection file not found: {self.collection_path}")

        try:
            content = self.collection_path.read_text(encoding='utf-8')
            self.collection = json.loads(content)
        except json.JSONDecodeError as e:
            raise PostmanParseError(f"Failed to parse collection as JSON: {e}")
        except (OSError, UnicodeDecodeError) as e:
            raise PostmanParseError(f"Failed to read collection: {e}")

        if not isinstance(self.collection, dict):
            raise PostmanParseError("Collection must be a JSON object")


def detect_version(data: dict) -> Optional[str]:
    """
    Detect the collection schema version from `info.schema`.

    Returns "2.1", "2.0", or None when no schema is declared.

    Raises:
        PostmanParseError: If a schema is declared but is not v2.0 or v2.1
    """
    info = data.get("info")
    schema = info.get("schema") if isinstance(info, dict) else None
    if schema is None or schema == "":
        return None
    if not isinstance(schema, str):
        raise PostmanParseError(f"Unsupported collection schema: {schema!r}")
    if "v2.1" in schema:
        return "2.1"
    if "v2.0" in schema:
        return "2.0"
    raise PostmanParseError(f"Unsupported collection schema: {schema}")


def parse_collection(data: dict) -> Collection:
    """
    Convert an already-decoded Postman collection into a Collection.

    Args:
        data: The decoded JSON document

    Returns:
        Collection with folder/request nodes resolved once
    """
    if not isinstance(data, dict):
        raise PostmanParseError("Collection must be a JSON object")

    version = detect_version(data)
    info = data.get("info") if isinstance(data.get("info"), dict) else {}
    name = info.get("name") or DEFAULT_COLLECTION_NAME

    return Collection(
        name=str(name),
        version=version,
        items=_parse_items(data.get("item")),
    )


def _parse_items(items: Any) -> list:
    nodes = []
    if not isinstance(items, list):
        return nodes

    for item in items:
        if not isinstance(item, dict):
            continue

        name = _as_optional_str(item.get("name"))
        request = item.get("request")

        # Folders carry an item list; anything else needs a request payload
        if isinstance(item.get("item"), list):
            nodes.append(Folder(name=name, items=_parse_items(item["item"])))
        elif isinstance(request, dict) or (isinstance(request, str) and request):
            nodes.append(RequestItem(name=name, request=parse_request(request)))
        else:
            logger.debug("Skipping item %r: neither folder nor request", name)

    return nodes


def parse_request(request: Any) -> RequestSpec:
    """Normalize a raw Postman request payload into a RequestSpec."""
    # v2.0 allows a request to be just its URL
    if isinstance(request, str):
        return RequestSpec(url=parse_url(request))

    if not isinstance(request, dict):
        return RequestSpec()

    method = request.get("method") or "GET"

    return RequestSpec(
        method=str(method),
        url=parse_url(request.get("url")),
        headers=parse_headers(request.get("header")),
        auth=parse_auth(request.get("auth")),
        body=parse_body(request.get("body")),
    )


def parse_url(url: Any) -> Optional[RequestUrl]:
    """Parse a string or object URL."""
    if isinstance(url, str):
        return RawUrl(raw=url) if url else None

    if not isinstance(url, dict):
        return None

    protocol = url.get("protocol")
    if protocol:
        protocol = str(protocol)
        if protocol.endswith(":"):
            protocol = protocol[:-1]

    host = url.get("host")
    if isinstance(host, list):
        host = [str(h) for h in host]
    elif host:
        host = [str(host)]
    else:
        host = []

    path = url.get("path")
    if isinstance(path, list):
        path = [_path_segment(p) for p in path]
    elif isinstance(path, str) and path.strip("/"):
        path = path.strip("/").split("/")
    else:
        path = []

    port = url.get("port")

    return StructuredUrl(
        protocol=protocol or None,
        host=host,
        path=path,
        port=str(port) if port else None,
    )


def _path_segment(segment: Any) -> str:
    # Segments are usually strings but may be {"type": ..., "value": ...}
    if isinstance(segment, dict):
        return str(segment.get("value") or "")
    return str(segment)


def parse_headers(headers: Any) -> list[Header]:
    """Parse a header list, or the v2.0 `Key: Value` newline string form."""
    if isinstance(headers, str):
        result = []
        for line in headers.splitlines():
            if ":" not in line:
                continue
            key, value = line.split(":", 1)
            result.append(Header(key=key.strip(), value=value.strip()))
        return result

    if not isinstance(headers, list):
        return []

    return [
        Header(key=_as_optional_str(h.get("key")), value=_as_optional_str(h.get("value")))
        for h in headers
        if isinstance(h, dict)
    ]


def _parse_params(params: Any) -> list[KeyValue]:
    # v2.1 uses [{key, value}], v2.0 uses {key: value}
    if isinstance(params, dict):
        return [KeyValue(key=str(k), value=_as_optional_str(v)) for k, v in params.items()]
    if isinstance(params, list):
        return [
            KeyValue(key=_as_optional_str(p.get("key")), value=_as_optional_str(p.get("value")))
            for p in params
            if isinstance(p, dict)
        ]
    return []


def parse_auth(auth: Any) -> Optional[AuthSpec]:
    """Parse a request auth descriptor."""
    if not isinstance(auth, dict):
        return None

    auth_type = auth.get("type") or PostmanAuthType.NOAUTH
    if auth_type == PostmanAuthType.BEARER:
        return BearerAuthSpec(params=_parse_params(auth.get("bearer")))
    if auth_type == PostmanAuthType.BASIC:
        return BasicAuthSpec(params=_parse_params(auth.get("basic")))
    return OtherAuthSpec(type=str(auth_type))


def parse_body(body: Any) -> Optional[BodySpec]:
    """Parse a request body descriptor."""
    if not isinstance(body, dict):
        return None

    mode = body.get("mode") or ""
    if mode == PostmanBodyMode.RAW:
        options = body.get("options") if isinstance(body.get("options"), dict) else {}
        raw_options = options.get("raw") if isinstance(options.get("raw"), dict) else {}
        raw = body.get("raw")
        return RawBody(
            raw=raw if isinstance(raw, str) else "",
            language=_as_optional_str(raw_options.get("language")),
        )
    if mode == PostmanBodyMode.FORMDATA:
        return FormDataBody()
    if mode == PostmanBodyMode.URLENCODED:
        return UrlEncodedBody()
    return OtherBody(mode=str(mode))


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def flatten_items(items: list, folder_name: Optional[str] = None) -> list[FlatRequest]:
    """
    Flatten a folder tree into requests, depth-first in document order.

    Each request keeps the name of its immediate enclosing folder only.

    Args:
        items: Top-level nodes (or a folder's children)
        folder_name: Name of the folder holding `items`

    Returns:
        Ordered list of FlatRequest records
    """
    requests: list[FlatRequest] = []
    for item in items:
        if isinstance(item, Folder):
            requests.extend(flatten_items(item.items, item.name))
        elif isinstance(item, RequestItem):
            requests.append(FlatRequest(name=item.name, request=item.request, folder_name=folder_name))
    return requests


def parse_postman(collection_path: Union[str, Path]) -> list[FlatRequest]:
    """
    Parse a Postman collection file and return its flattened requests.

    Args:
        collection_path: Path to Postman collection JSON file

    Returns:
        List of FlatRequest records
    """
    parser = PostmanParser(collection_path)
    return flatten_items(parser.parse().items)
