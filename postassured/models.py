"""
Core data structures for postassured using Pydantic.

This module defines all the data models used throughout the application:
- Collection / Folder / RequestItem: the typed Postman collection tree
- RequestSpec and its URL, auth and body variants
- FlatRequest: a request pulled out of the tree with its folder name
- ExtractedSemantics: the normalized view of a request used for code emission
- GeneratedArtifact / ConversionResult: pipeline output
- ConversionConfig: configuration for a conversion run
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_COLLECTION_NAME = "PostmanCollection"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class KeyValue(_Frozen):
    """A key/value pair as used by Postman headers and auth parameters."""
    key: Optional[str] = None
    value: Optional[str] = None


Header = KeyValue


# ==================== URL variants ====================

class RawUrl(_Frozen):
    """URL given as a plain string, possibly containing {{variables}}."""
    kind: Literal["raw"] = "raw"
    raw: str


class StructuredUrl(_Frozen):
    """URL given as a Postman URL object."""
    kind: Literal["structured"] = "structured"
    protocol: Optional[str] = None
    host: list[str] = Field(default_factory=list)
    path: list[str] = Field(default_factory=list)
    port: Optional[str] = None


RequestUrl = Annotated[Union[RawUrl, StructuredUrl], Field(discriminator="kind")]


# ==================== Auth variants ====================

class BearerAuthSpec(_Frozen):
    """Postman `bearer` auth descriptor."""
    type: Literal["bearer"] = "bearer"
    params: list[KeyValue] = Field(default_factory=list)


class BasicAuthSpec(_Frozen):
    """Postman `basic` auth descriptor."""
    type: Literal["basic"] = "basic"
    params: list[KeyValue] = Field(default_factory=list)


class OtherAuthSpec(_Frozen):
    """Any other auth mode (noauth, apikey, oauth2, ...)."""
    type: str = "noauth"


AuthSpec = Union[BearerAuthSpec, BasicAuthSpec, OtherAuthSpec]


# ==================== Body variants ====================

class RawBody(_Frozen):
    mode: Literal["raw"] = "raw"
    raw: str = ""
    language: Optional[str] = None


class FormDataBody(_Frozen):
    mode: Literal["formdata"] = "formdata"


class UrlEncodedBody(_Frozen):
    mode: Literal["urlencoded"] = "urlencoded"


class OtherBody(_Frozen):
    """Body modes that have no literal rendering (file, graphql, ...)."""
    mode: str = ""


BodySpec = Union[RawBody, FormDataBody, UrlEncodedBody, OtherBody]


# ==================== Collection tree ====================

class RequestSpec(_Frozen):
    """The request payload of a Postman item."""
    method: str = "GET"
    url: Optional[RequestUrl] = None
    headers: list[Header] = Field(default_factory=list)
    auth: Optional[AuthSpec] = None
    body: Optional[BodySpec] = None


class RequestItem(_Frozen):
    """A leaf node holding one request."""
    kind: Literal["request"] = "request"
    name: Optional[str] = None
    request: RequestSpec


class Folder(_Frozen):
    """A folder node holding child nodes."""
    kind: Literal["folder"] = "folder"
    name: Optional[str] = None
    items: list["Node"] = Field(default_factory=list)


Node = Annotated[Union[Folder, RequestItem], Field(discriminator="kind")]

Folder.model_rebuild()


class Collection(_Frozen):
    """Root of a Postman collection."""
    name: str = DEFAULT_COLLECTION_NAME
    version: Optional[str] = None
    items: list[Node] = Field(default_factory=list)


class FlatRequest(_Frozen):
    """A request extracted from the tree with its immediate folder name."""
    name: Optional[str] = None
    request: RequestSpec
    folder_name: Optional[str] = None


# ==================== Extracted semantics ====================

class BearerCredentials(_Frozen):
    kind: Literal["bearer"] = "bearer"
    token: str


class BasicCredentials(_Frozen):
    kind: Literal["basic"] = "basic"
    username: str
    password: str


ResolvedAuth = Annotated[Union[BearerCredentials, BasicCredentials], Field(discriminator="kind")]


class ExtractedSemantics(_Frozen):
    """Normalized request semantics used by the code emitter."""
    base_uri: str
    path: str
    auth: Optional[ResolvedAuth] = None
    content_type: Optional[str] = None
    body: Optional[str] = None


# ==================== Output ====================

class GeneratedArtifact(_Frozen):
    """A complete, ready-to-persist text file."""
    path: str  # relative to the output root
    content: str


class ConversionResult(BaseModel):
    """Complete result of converting one collection."""
    collection_name: str
    class_name: str
    requests: list[FlatRequest] = Field(default_factory=list)
    artifacts: list[GeneratedArtifact] = Field(default_factory=list)

    @property
    def request_count(self) -> int:
        """Number of requests converted (one test method each)."""
        return len(self.requests)

    def artifact(self, path: str) -> Optional[GeneratedArtifact]:
        """Look up an artifact by its relative path."""
        for artifact in self.artifacts:
            if artifact.path == path:
                return artifact
        return None


class ConversionConfig(BaseModel):
    """Configuration for a conversion run."""
    collection_path: str
    output_dir: str
    enable_allure: bool = True
    verbose: bool = False
