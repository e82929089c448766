"""
postassured - Postman Collection to RestAssured test generator

Converts Postman Collection v2.0/v2.1 documents into a Maven project with a
TestNG + RestAssured test class, one test method per request.

Features:
- Nested folder flattening (folders become Allure stories)
- URL, auth, content-type and body extraction with safe fallbacks
- Java identifier and string-literal sanitizing
- Optional Allure reporting support
"""

__version__ = "1.0.0"
__author__ = "postassured Team"

from .models import (
    Collection,
    Folder,
    RequestItem,
    RequestSpec,
    FlatRequest,
    ExtractedSemantics,
    GeneratedArtifact,
    ConversionResult,
    ConversionConfig,
)
from .postman import PostmanParser, PostmanParseError, parse_collection, flatten_items
from .extractor import extract_semantics
from .naming import sanitize_class_name, sanitize_method_name, escape_java_string
from .emitter import RestAssuredEmitter
from .converter import convert, write_artifacts, ArtifactWriteError

__all__ = [
    # Models
    'Collection',
    'Folder',
    'RequestItem',
    'RequestSpec',
    'FlatRequest',
    'ExtractedSemantics',
    'GeneratedArtifact',
    'ConversionResult',
    'ConversionConfig',

    # Loading
    'PostmanParser',
    'PostmanParseError',
    'parse_collection',
    'flatten_items',

    # Pipeline
    'extract_semantics',
    'sanitize_class_name',
    'sanitize_method_name',
    'escape_java_string',
    'RestAssuredEmitter',
    'convert',
    'write_artifacts',
    'ArtifactWriteError',
]
