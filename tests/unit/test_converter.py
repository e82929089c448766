"""
Unit tests for the conversion pipeline and artifact writer.
"""

import re
from unittest.mock import patch

import pytest

from postassured.converter import (
    POM_PATH,
    ArtifactWriteError,
    class_source_path,
    convert,
    write_artifacts,
)
from postassured.models import GeneratedArtifact
from postassured.postman import parse_collection


# ============================================================================
# CONVERT TESTS
# ============================================================================

class TestConvert:
    """Tests for convert()."""

    def test_end_to_end_scenario(self, simple_collection):
        """Test the one-folder, one-request collection."""
        result = convert(parse_collection(simple_collection), enable_allure=False)

        assert result.class_name == "MyAPI"
        assert result.collection_name == "My API"
        assert result.request_count == 1

        source = result.artifact("src/test/java/tests/MyAPITest.java").content
        assert "public class MyAPITest {" in source
        assert "public void testGetUser() {" in source
        assert '.baseUri("https://api.example.com")' in source
        assert '.get("/users/1")' in source
        assert ".statusCode(200);" in source

    def test_artifact_paths(self, simple_collection):
        result = convert(parse_collection(simple_collection))

        assert [a.path for a in result.artifacts] == [POM_PATH, "src/test/java/tests/MyAPITest.java"]

    def test_method_count_matches_requests(self, nested_collection):
        """Test one test method per reachable request, in tree order."""
        result = convert(parse_collection(nested_collection))
        source = result.artifact(class_source_path(result.class_name)).content

        names = re.findall(r"public void (test\w*)\(\)", source)
        assert names == [
            "testHealth", "testListOrders", "testDeleteOrder", "testCreateOrder", "testLogout"
        ]
        assert len(names) == result.request_count

    def test_nested_semantics_rendered(self, nested_collection):
        result = convert(parse_collection(nested_collection), enable_allure=True)
        source = result.artifact(class_source_path("ShopAPI")).content

        assert '@Story("Admin")' in source
        assert '.auth().basic("admin", "s3cret")' in source
        assert '.delete("/orders/placeholder")' in source
        assert '.header("Authorization", "Bearer abc123")' in source
        assert '.body("{\\"item\\": \\"book\\"}")' in source
        assert source.count("@Description(") == 5
        assert source.count("@Story(") == 3

    def test_empty_request_object_emits_default_get(self):
        """Test an empty request payload still produces one test method."""
        result = convert(parse_collection({"item": [{"name": "Ping", "request": {}}]}))
        source = result.artifact(class_source_path(result.class_name)).content

        assert result.request_count == 1
        assert "public void testPing()" in source
        assert '.baseUri("http://localhost")' in source
        assert '.get("/")' in source

    def test_allure_flag_consistent(self, simple_collection):
        """Test the flag switches both artifacts together."""
        collection = parse_collection(simple_collection)

        off = convert(collection, enable_allure=False)
        on = convert(collection, enable_allure=True)

        assert all("allure" not in a.content.lower() for a in off.artifacts)
        assert all("allure" in a.content.lower() for a in on.artifacts)

    def test_default_collection_name(self):
        result = convert(parse_collection({"item": []}))

        assert result.class_name == "PostmanCollection"
        assert result.artifacts[1].path == "src/test/java/tests/PostmanCollectionTest.java"

    def test_duplicate_names_not_disambiguated(self):
        collection = parse_collection({
            "item": [
                {"name": "Ping", "request": {"url": "https://a.io/1"}},
                {"name": "Ping!", "request": {"url": "https://a.io/2"}},
            ]
        })

        source = convert(collection).artifacts[1].content

        assert source.count("public void testPing()") == 2


# ============================================================================
# WRITER TESTS
# ============================================================================

class TestWriteArtifacts:
    """Tests for write_artifacts()."""

    def test_writes_nested_paths(self, temp_dir):
        artifacts = [
            GeneratedArtifact(path="pom.xml", content="<project/>"),
            GeneratedArtifact(path="src/test/java/tests/ApiTest.java", content="class ApiTest {}"),
        ]

        written = write_artifacts(artifacts, temp_dir / "out")

        assert written == [temp_dir / "out" / "pom.xml", temp_dir / "out/src/test/java/tests/ApiTest.java"]
        assert (temp_dir / "out" / "pom.xml").read_text(encoding="utf-8") == "<project/>"
        assert written[1].read_text(encoding="utf-8") == "class ApiTest {}"

    def test_overwrites_existing(self, temp_dir):
        (temp_dir / "pom.xml").write_text("old", encoding="utf-8")

        write_artifacts([GeneratedArtifact(path="pom.xml", content="new")], temp_dir)

        assert (temp_dir / "pom.xml").read_text(encoding="utf-8") == "new"

    def test_write_error_wrapped(self, temp_dir):
        artifact = GeneratedArtifact(path="pom.xml", content="x")

        with patch("pathlib.Path.write_text", side_effect=PermissionError("denied")):
            with pytest.raises(ArtifactWriteError, match="denied"):
                write_artifacts([artifact], temp_dir)
