"""
Conversion pipeline: collection in, generated artifacts out.
"""

import logging
from pathlib import Path
from typing import Iterable, Union

from .emitter import JAVA_PACKAGE, RestAssuredEmitter
from .extractor import extract_semantics
from .models import Collection, ConversionResult, GeneratedArtifact
from .naming import sanitize_class_name
from .postman import flatten_items


logger = logging.getLogger(__name__)

POM_PATH = "pom.xml"
TEST_SOURCE_DIR = f"src/test/java/{JAVA_PACKAGE}"


class ArtifactWriteError(Exception):
    """Raised when a generated file cannot be written."""
    pass


def class_source_path(class_name: str) -> str:
    """Relative path of the generated test class."""
    return f"{TEST_SOURCE_DIR}/{class_name}Test.java"


def convert(collection: Collection, enable_allure: bool = True) -> ConversionResult:
    """
    Convert a collection into a pom.xml and a RestAssured test class.

    Args:
        collection: Loaded Postman collection
        enable_allure: Include Allure reporting support

    Returns:
        ConversionResult holding both artifacts
    """
    requests = flatten_items(collection.items)
    class_name = sanitize_class_name(collection.name)
    logger.debug("Converting %d request(s) into %sTest", len(requests), class_name)

    pairs = [(flat, extract_semantics(flat.request)) for flat in requests]

    emitter = RestAssuredEmitter(enable_allure=enable_allure)
    artifacts = [
        GeneratedArtifact(path=POM_PATH, content=emitter.generate_pom()),
        GeneratedArtifact(
            path=class_source_path(class_name),
            content=emitter.generate_test_class(class_name, pairs),
        ),
    ]

    return ConversionResult(
        collection_name=collection.name,
        class_name=class_name,
        requests=requests,
        artifacts=artifacts,
    )


def write_artifacts(
    artifacts: Iterable[GeneratedArtifact],
    output_dir: Union[str, Path],
) -> list[Path]:
    """
    Write artifacts below an output directory.

    Args:
        artifacts: Generated files
        output_dir: Output root; created if missing

    Returns:
        Paths of the written files

    Raises:
        ArtifactWriteError: If a directory or file cannot be written
    """
    root = Path(output_dir)
    written: list[Path] = []

    for artifact in artifacts:
        target = root / artifact.path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(artifact.content, encoding='utf-8')
        except OSError as e:
            raise ArtifactWriteError(f"Failed to write {target}: {e}") from e
        logger.debug("Wrote %s", target)
        written.append(target)

    return written
