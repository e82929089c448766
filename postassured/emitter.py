"""
RestAssured code generator for postassured.

Renders a Maven pom.xml and a TestNG + RestAssured test class from
flattened requests and their extracted semantics. Allure reporting
support is switched on or off as a whole.
"""

from typing import Iterable

from .models import BasicCredentials, BearerCredentials, ExtractedSemantics, FlatRequest
from .naming import escape_java_string, sanitize_method_name


DEFAULT_METHOD_NAME = "unnamedRequest"
DEFAULT_DESCRIPTION = "Unnamed Request"
EXPECTED_STATUS = 200
JAVA_PACKAGE = "tests"

# Verbs with a dedicated RequestSpecification method
REST_ASSURED_VERBS = {"get", "post", "put", "patch", "delete", "head", "options"}

RESTASSURED_VERSION = "5.4.0"
TESTNG_VERSION = "7.8.0"
HAMCREST_VERSION = "2.2"
SUREFIRE_VERSION = "3.1.2"
ALLURE_VERSION = "2.24.0"
ALLURE_MAVEN_VERSION = "2.12.0"


ALLURE_DEPENDENCIES = f"""
        <!-- Allure RestAssured -->
        <dependency>
            <groupId>io.qameta.allure</groupId>
            <artifactId>allure-rest-assured</artifactId>
            <version>{ALLURE_VERSION}</version>
        </dependency>

        <!-- Allure TestNG -->
        <dependency>
            <groupId>io.qameta.allure</groupId>
            <artifactId>allure-testng</artifactId>
            <version>{ALLURE_VERSION}</version>
        </dependency>"""

ALLURE_PLUGIN = f"""
            <!-- Allure Maven Plugin -->
            <plugin>
                <groupId>io.qameta.allure</groupId>
                <artifactId>allure-maven</artifactId>
                <version>{ALLURE_MAVEN_VERSION}</version>
                <configuration>
                    <reportVersion>{ALLURE_VERSION}</reportVersion>
                </configuration>
            </plugin>"""

ALLURE_IMPORTS = """
import io.qameta.allure.Description;
import io.qameta.allure.Story;
import io.qameta.allure.restassured.AllureRestAssured;"""


class RestAssuredEmitter:
    """Generates RestAssured test sources and the matching Maven build."""

    def __init__(self, enable_allure: bool = True):
        """Initialize the emitter.

        Args:
            enable_allure: Include Allure dependencies and annotations
        """
        self.enable_allure = enable_allure

    def generate_pom(self) -> str:
        """Generate the Maven build file.

        Returns:
            The pom.xml content
        """
        allure_deps = ALLURE_DEPENDENCIES if self.enable_allure else ""
        allure_plugin = ALLURE_PLUGIN if self.enable_allure else ""

        return f"""<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
         xsi:schemaLocation="http://maven.apache.org/POM/4.0.0
             http://maven.apache.org/xsd/maven-4.0.0.xsd">
    <modelVersion>4.0.0</modelVersion>

    <groupId>com.generated</groupId>
    <artifactId>restassured-tests</artifactId>
    <version>1.0.0</version>
    <packaging>jar</packaging>

    <properties>
        <maven.compiler.source>11</maven.compiler.source>
        <maven.compiler.target>11</maven.compiler.target>
        <project.build.sourceEncoding>UTF-8</project.build.sourceEncoding>
    </properties>

    <dependencies>
        <!-- RestAssured -->
        <dependency>
            <groupId>io.rest-assured</groupId>
            <artifactId>rest-assured</artifactId>
            <version>{RESTASSURED_VERSION}</version>
            <scope>test</scope>
        </dependency>

        <!-- TestNG -->
        <dependency>
            <groupId>org.testng</groupId>
            <artifactId>testng</artifactId>
            <version>{TESTNG_VERSION}</version>
            <scope>test</scope>
        </dependency>

        <!-- Hamcrest -->
        <dependency>
            <groupId>org.hamcrest</groupId>
            <artifactId>hamcrest</artifactId>
            <version>{HAMCREST_VERSION}</version>
            <scope>test</scope>
        </dependency>{allure_deps}
    </dependencies>

    <build>
        <plugins>
            <!-- Maven Surefire Plugin -->
            <plugin>
                <groupId>org.apache.maven.plugins</groupId>
                <artifactId>maven-surefire-plugin</artifactId>
                <version>{SUREFIRE_VERSION}</version>
            </plugin>{allure_plugin}
        </plugins>
    </build>
</project>
"""

    def generate_test_class(
        self,
        class_name: str,
        requests: Iterable[tuple[FlatRequest, ExtractedSemantics]],
    ) -> str:
        """Generate the complete test class.

        Args:
            class_name: Sanitized collection name; `Test` is appended
            requests: (request, semantics) pairs in emission order

        Returns:
            The Java source
        """
        methods = "\n\n".join(
            self.generate_test_method(flat, semantics) for flat, semantics in requests
        )

        return f"""package {JAVA_PACKAGE};

import io.restassured.RestAssured;
import org.testng.annotations.BeforeClass;
import org.testng.annotations.Test;{self._generate_imports()}

import static io.restassured.RestAssured.given;
import static org.hamcrest.Matchers.*;

public class {class_name}Test {{
{self._generate_setup()}
{methods}
}}
"""

    def _generate_imports(self) -> str:
        return ALLURE_IMPORTS if self.enable_allure else ""

    def _generate_setup(self) -> str:
        """Generate the @BeforeClass hook registering the Allure filter."""
        if not self.enable_allure:
            return ""
        return """
    @BeforeClass
    public void setUp() {
        RestAssured.filters(new AllureRestAssured());
    }
"""

    def generate_test_method(self, flat: FlatRequest, semantics: ExtractedSemantics) -> str:
        """Generate one @Test method for a request."""
        lines = []

        if self.enable_allure:
            if flat.folder_name:
                lines.append(f'    @Story("{escape_java_string(flat.folder_name)}")')
            description = escape_java_string(flat.name or DEFAULT_DESCRIPTION)
            lines.append(f'    @Description("{description}")')

        method_name = sanitize_method_name(flat.name or DEFAULT_METHOD_NAME)
        lines.append("    @Test")
        lines.append(f"    public void {method_name}() {{")
        lines.append("        given()")
        lines.append(f'            .baseUri("{escape_java_string(semantics.base_uri)}")')
        lines.extend(self._generate_auth(semantics))

        if semantics.content_type:
            lines.append(f'            .contentType("{escape_java_string(semantics.content_type)}")')
        if semantics.body:
            lines.append(f'            .body("{escape_java_string(semantics.body)}")')

        lines.append("        .when()")
        lines.append(f"            {self._generate_call(flat.request.method, semantics.path)}")
        lines.append("        .then()")
        lines.append(f"            .statusCode({EXPECTED_STATUS});")
        lines.append("    }")

        return "\n".join(lines)

    def _generate_auth(self, semantics: ExtractedSemantics) -> list[str]:
        auth = semantics.auth
        if isinstance(auth, BearerCredentials):
            return [f'            .header("Authorization", "Bearer {escape_java_string(auth.token)}")']
        if isinstance(auth, BasicCredentials):
            username = escape_java_string(auth.username)
            password = escape_java_string(auth.password)
            return [f'            .auth().basic("{username}", "{password}")']
        return []

    def _generate_call(self, method: str, path: str) -> str:
        """Render the HTTP call, falling back to request() for unusual verbs."""
        verb = (method or "").strip() or "GET"
        safe_path = escape_java_string(path)
        if verb.lower() in REST_ASSURED_VERBS:
            return f'.{verb.lower()}("{safe_path}")'
        return f'.request("{escape_java_string(verb.upper())}", "{safe_path}")'
