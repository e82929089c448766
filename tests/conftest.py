"""
Pytest Configuration and Fixtures for postassured Tests.

This module provides shared fixtures for unit and end-to-end tests.
"""

import json
import sys
import tempfile
from pathlib import Path

import pytest

# Add postassured to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from postassured.models import (
    BasicAuthSpec,
    BearerAuthSpec,
    Header,
    KeyValue,
    RawBody,
    RawUrl,
    RequestSpec,
    StructuredUrl,
)


# ============================================================================
# SAMPLE COLLECTIONS
# ============================================================================

V21_SCHEMA = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"


@pytest.fixture
def simple_collection():
    """The one-folder, one-request collection used across tests."""
    return {
        "info": {"name": "My API", "schema": V21_SCHEMA},
        "item": [
            {
                "name": "Users",
                "item": [
                    {
                        "name": "Get User",
                        "request": {
                            "method": "GET",
                            "url": "https://api.example.com/users/1"
                        }
                    }
                ]
            }
        ]
    }


@pytest.fixture
def nested_collection():
    """Collection mixing top-level requests, folders and nested folders."""
    return {
        "info": {"name": "Shop API", "schema": V21_SCHEMA},
        "item": [
            {
                "name": "Health",
                "request": {"method": "GET", "url": "https://shop.example.com/health"}
            },
            {
                "name": "Orders",
                "item": [
                    {
                        "name": "List Orders",
                        "request": {
                            "method": "GET",
                            "url": {
                                "raw": "https://shop.example.com/orders",
                                "protocol": "https",
                                "host": ["shop", "example", "com"],
                                "path": ["orders"]
                            }
                        }
                    },
                    {
                        "name": "Admin",
                        "item": [
                            {
                                "name": "Delete Order",
                                "request": {
                                    "method": "DELETE",
                                    "url": "https://shop.example.com/orders/{{id}}",
                                    "auth": {
                                        "type": "basic",
                                        "basic": [
                                            {"key": "username", "value": "admin"},
                                            {"key": "password", "value": "s3cret"}
                                        ]
                                    }
                                }
                            }
                        ]
                    },
                    {
                        "name": "Create Order",
                        "request": {
                            "method": "POST",
                            "url": "https://shop.example.com/orders",
                            "header": [
                                {"key": "Authorization", "value": "Bearer abc123"}
                            ],
                            "body": {
                                "mode": "raw",
                                "raw": "  {\"item\": \"book\"}\n",
                                "options": {"raw": {"language": "json"}}
                            }
                        }
                    }
                ]
            },
            {
                "name": "Logout",
                "request": {"method": "POST", "url": "https://shop.example.com/logout"}
            }
        ]
    }


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_collection(temp_dir):
    """Write a collection dict to a JSON file and return its path."""
    def _write(data, name="collection.json"):
        path = temp_dir / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


# ============================================================================
# SAMPLE REQUESTS
# ============================================================================

@pytest.fixture
def structured_url():
    """Structured URL with host, path and port."""
    return StructuredUrl(
        protocol="https",
        host=["api", "example", "com"],
        path=["v1", "users"],
        port="8080"
    )


@pytest.fixture
def bearer_request():
    """Request with explicit bearer auth and a conflicting header."""
    return RequestSpec(
        method="GET",
        url=RawUrl(raw="https://api.example.com/me"),
        headers=[Header(key="Authorization", value="Bearer from-header")],
        auth=BearerAuthSpec(params=[KeyValue(key="token", value="from-auth")])
    )


@pytest.fixture
def basic_request():
    """Request with basic auth and a JSON body."""
    return RequestSpec(
        method="POST",
        url=RawUrl(raw="https://api.example.com/login"),
        auth=BasicAuthSpec(params=[
            KeyValue(key="username", value="alice"),
            KeyValue(key="password", value="wonderland"),
        ]),
        body=RawBody(raw='{"remember": true}', language="json")
    )
