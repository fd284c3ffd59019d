"""
OrderHub — OpenAPI Document Builder
====================================

What:  Assembles the OpenAPI document served at /openapi.json and rendered
       by Swagger UI at /.
How:   Merges three sources:
         1. Static metadata: info, servers, tags, bearerAuth security scheme
         2. The static schema catalog (orderhub/docs/schemas.py), installed
            verbatim as components.schemas
         3. Route annotations: summaries, docstrings, tags, and the
            request/response `$ref`s and examples declared on each route
            decorator with the helpers below
When:  Lazily on the first request for the document, then cached on the app.

The output depends only on the metadata, the catalog and the registered
routes, so two builds for the same app are identical.

FastAPI adds a 422 response referencing HTTPValidationError to every route
with a body or parameters. This API reports validation failures as
400 ValidationError, so those entries are dropped.
"""

import copy
import logging
from typing import Any, Dict, Iterator, List, Optional

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from orderhub import __version__
from orderhub.config import settings
from orderhub.docs.schemas import SCHEMA_CATALOG, ref

logger = logging.getLogger(__name__)

REF_PREFIX = "#/components/schemas/"

API_TITLE = "OrderHub API"
API_DESCRIPTION = (
    "OrderHub is a scalable and secure RESTful API for managing customer orders. "
    "Sellers manage orders and update their status, while buyers place and "
    "monitor their orders in real time."
)
API_CONTACT = {
    "name": "Alfredo Augusto Petri",
    "url": "https://github.com/alfredo-petri/oop-rest-api-OrderHub",
}
API_LICENSE = {"name": "ISC"}

BEARER_AUTH_DESCRIPTION = (
    "JWT obtained from POST /sessions. Send it as: Authorization: Bearer {token}"
)

API_TAGS: List[Dict[str, str]] = [
    {"name": "Users", "description": "User account operations (sign up)"},
    {"name": "Sessions", "description": "Authentication (login and JWT issuance)"},
    {"name": "Deliveries", "description": "Delivery / order operations"},
    {"name": "Delivery Logs", "description": "Delivery tracking log operations"},
]


# ══════════════════════════════════════════════════════════════════════════
# Route annotation helpers
# ══════════════════════════════════════════════════════════════════════════

def json_content(schema_name: str, examples: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    media: Dict[str, Any] = {"schema": ref(schema_name)}
    if examples:
        media["examples"] = examples
    return {"application/json": media}


def documented_response(
    description: str,
    schema_name: str,
    examples: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """A `responses=` entry whose body is a catalog schema."""
    return {"description": description, "content": json_content(schema_name, examples)}


def request_body(schema_name: str, examples: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """An `openapi_extra=` fragment documenting a JSON request body."""
    return {"requestBody": {"required": True, "content": json_content(schema_name, examples)}}


def example(summary: str, value: Any) -> Dict[str, Any]:
    return {"summary": summary, "value": value}


def validation_example(*issues: Dict[str, str]) -> Dict[str, Any]:
    return {"message": "validation error:", "issues": list(issues)}


VALIDATION_ERROR_RESPONSE = documented_response("Request data failed validation", "ValidationError")
SERVER_ERROR_RESPONSE = documented_response(
    "Unexpected server error",
    "ServerError",
    {"serverError": example("Server error", {"message": "Internal server error"})},
)
UNAUTHENTICATED_RESPONSE = documented_response(
    "Missing, invalid or expired JWT",
    "AppError",
    {
        "missingToken": example("No token", {"message": "JWT token not found"}),
        "invalidToken": example("Invalid token", {"message": "Invalid JWT token"}),
    },
)
FORBIDDEN_RESPONSE = documented_response(
    "Authenticated user lacks the required role",
    "AppError",
    {"forbidden": example("Wrong role", {"message": "Unauthorized"})},
)


# ══════════════════════════════════════════════════════════════════════════
# Reference checking
# ══════════════════════════════════════════════════════════════════════════

def collect_refs(node: Any) -> Iterator[str]:
    """Yield every `$ref` value found anywhere in a JSON-like structure."""
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "$ref" and isinstance(value, str):
                yield value
            else:
                yield from collect_refs(value)
    elif isinstance(node, list):
        for item in node:
            yield from collect_refs(item)


def find_dangling_refs(document: Dict[str, Any]) -> List[str]:
    """Component-schema `$ref`s in `document` with no matching schema."""
    defined = set(document.get("components", {}).get("schemas", {}))
    dangling = {
        target
        for target in collect_refs(document)
        if target.startswith(REF_PREFIX) and target[len(REF_PREFIX):] not in defined
    }
    return sorted(dangling)


# ══════════════════════════════════════════════════════════════════════════
# Document assembly
# ══════════════════════════════════════════════════════════════════════════

def build_servers() -> List[Dict[str, str]]:
    servers = [
        {
            "url": f"http://localhost:{settings.port}",
            "description": "Local development server",
        }
    ]
    if settings.prod_server_url:
        servers.append({"url": settings.prod_server_url, "description": "Production server"})
    return servers


def _drop_default_validation_responses(document: Dict[str, Any]) -> None:
    for operations in document.get("paths", {}).values():
        for operation in operations.values():
            responses = operation.get("responses", {})
            default = responses.get("422")
            if default and f"{REF_PREFIX}HTTPValidationError" in collect_refs(default):
                del responses["422"]


def build_openapi_document(app: FastAPI) -> Dict[str, Any]:
    """
    Build the complete OpenAPI document for `app`.

    Returns:
        A new dict; the caller owns it (install_openapi caches it on the app).
    """
    document = get_openapi(
        title=API_TITLE,
        version=__version__,
        openapi_version="3.0.3",
        description=API_DESCRIPTION,
        routes=app.routes,
        tags=API_TAGS,
        servers=build_servers(),
        contact=API_CONTACT,
        license_info=API_LICENSE,
    )

    components = document.setdefault("components", {})
    # FastAPI's generated component schemas are replaced by the catalog
    components["schemas"] = copy.deepcopy(SCHEMA_CATALOG)
    security_schemes = components.setdefault("securitySchemes", {})
    security_schemes["bearerAuth"] = {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
        "description": BEARER_AUTH_DESCRIPTION,
    }

    _drop_default_validation_responses(document)

    dangling = find_dangling_refs(document)
    if dangling:
        logger.warning("OpenAPI document has unresolved references: %s", ", ".join(dangling))

    return document


def install_openapi(app: FastAPI) -> None:
    """Replace FastAPI's default generator with build_openapi_document (cached)."""

    def openapi() -> Dict[str, Any]:
        if app.openapi_schema is None:
            app.openapi_schema = build_openapi_document(app)
        return app.openapi_schema

    app.openapi = openapi  # type: ignore[method-assign]
