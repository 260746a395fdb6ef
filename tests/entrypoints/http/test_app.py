"""
Unit tests for the stub discovery API application setup.

- build_app() creates a configured FastAPI instance
- Health and discovery routers are registered with the right prefixes
- OpenAPI documentation endpoints are available
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront_discovery.entrypoints.http.app import build_app


def test_build_app_returns_fastapi_instance() -> None:
    assert isinstance(build_app(), FastAPI)


def test_build_app_creates_new_instance_each_call() -> None:
    assert build_app() is not build_app()


def test_app_metadata() -> None:
    app = build_app()

    assert app.title == "Storefront Discovery Stub API"
    assert app.version == "0.1.0"
    assert "discovery backend" in app.description


def test_routes_are_registered_with_prefixes() -> None:
    paths = {route.path for route in build_app().routes}

    assert "/health" in paths
    assert "/v1/discovery/search" in paths


def test_openapi_schema_lists_search_parameters() -> None:
    client = TestClient(build_app())

    response = client.get("/openapi.json")

    assert response.status_code == 200
    parameters = response.json()["paths"]["/v1/discovery/search"]["get"]["parameters"]
    names = {parameter["name"] for parameter in parameters}
    assert {"q", "category", "minPrice", "maxPrice", "sort", "page", "limit"} <= names


def test_documentation_endpoints_are_accessible() -> None:
    client = TestClient(build_app())

    assert client.get("/docs").status_code == 200
    assert client.get("/redoc").status_code == 200
