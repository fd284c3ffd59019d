"""
OrderHub — OpenAPI Schema Catalog
==================================

What:  Reusable OpenAPI schema objects, referenced from route annotations
       and from each other with `#/components/schemas/<Name>`.
How:   Plain dicts. build_openapi_document() installs SCHEMA_CATALOG as the
       document's `components.schemas` verbatim.

Every `$ref` in here must resolve to another key of SCHEMA_CATALOG
(checked by tests/test_openapi.py).
"""

from typing import Any, Dict

_UUID_EXAMPLE = "123e4567-e89b-12d3-a456-426614174000"
_DATE_EXAMPLE = "2024-01-15T10:30:00.000Z"


def ref(name: str) -> Dict[str, str]:
    """`{"$ref": "#/components/schemas/<name>"}`"""
    return {"$ref": f"#/components/schemas/{name}"}


def _uuid(description: str) -> Dict[str, Any]:
    return {"type": "string", "format": "uuid", "description": description, "example": _UUID_EXAMPLE}


def _timestamp(description: str, nullable: bool = False) -> Dict[str, Any]:
    schema: Dict[str, Any] = {
        "type": "string",
        "format": "date-time",
        "description": description,
        "example": _DATE_EXAMPLE,
    }
    if nullable:
        schema["nullable"] = True
    return schema


_USER_NAME = {"type": "string", "description": "Full name of the user", "example": "João Silva"}
_USER_EMAIL = {
    "type": "string",
    "format": "email",
    "description": "User email",
    "example": "joao@example.com",
}
_LOG_DESCRIPTION = {
    "type": "string",
    "description": "Tracking event description",
    "example": "Pacote saiu para entrega",
}
_DELIVERY_DESCRIPTION = {
    "type": "string",
    "description": "Delivery description",
    "example": "Entrega de produtos eletrônicos",
}


SCHEMA_CATALOG: Dict[str, Dict[str, Any]] = {
    # ── Enums ─────────────────────────────────────────────────────────────
    "UserRole": {
        "type": "string",
        "enum": ["customer", "sale"],
        "description": "Role of the user in the system",
        "example": "customer",
    },
    "DeliveryStatus": {
        "type": "string",
        "enum": ["accepted", "production", "shipped", "delivered"],
        "description": "Delivery status",
        "example": "accepted",
    },
    # ── Users ─────────────────────────────────────────────────────────────
    "User": {
        "type": "object",
        "properties": {
            "id": _uuid("Unique user id"),
            "name": _USER_NAME,
            "email": _USER_EMAIL,
            "password": {
                "type": "string",
                "format": "password",
                "description": "User password (creation requests only, never returned)",
                "example": "senha123",
                "minLength": 6,
                "maxLength": 72,
                "writeOnly": True,
            },
            "role": ref("UserRole"),
            "createdAt": _timestamp("When the user was created"),
            "updatedAt": _timestamp("Last update of the user", nullable=True),
        },
        "required": ["id", "name", "email", "role", "createdAt"],
    },
    "UserWithoutPassword": {
        "type": "object",
        "properties": {
            "id": _uuid("Unique user id"),
            "name": _USER_NAME,
            "email": _USER_EMAIL,
            "role": ref("UserRole"),
            "createdAt": _timestamp("When the user was created"),
            "updatedAt": _timestamp("Last update of the user", nullable=True),
        },
        "required": ["id", "name", "email", "role", "createdAt"],
    },
    "CreateUserRequest": {
        "type": "object",
        "properties": {
            "name": _USER_NAME,
            "email": _USER_EMAIL,
            "password": {
                "type": "string",
                "format": "password",
                "description": "User password (at least 6 characters, at most 72 bytes)",
                "example": "senha123",
                "minLength": 6,
                "maxLength": 72,
            },
            "role": {
                "allOf": [ref("UserRole")],
                "description": "User role (optional, defaults to customer)",
                "example": "customer",
            },
        },
        "required": ["name", "email", "password"],
    },
    "CreateUserResponse": {
        "type": "object",
        "properties": {"newUser": ref("User")},
    },
    # ── Sessions ──────────────────────────────────────────────────────────
    "CreateSessionRequest": {
        "type": "object",
        "properties": {
            "email": _USER_EMAIL,
            "password": {
                "type": "string",
                "format": "password",
                "description": "User password",
                "example": "senha123",
            },
        },
        "required": ["email", "password"],
    },
    "CreateSessionResponse": {
        "type": "object",
        "properties": {
            "token": {
                "type": "string",
                "description": "JWT for authenticating protected requests",
                "example": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            },
            "userWithoutPassword": ref("UserWithoutPassword"),
        },
        "required": ["token", "userWithoutPassword"],
    },
    # ── Deliveries ────────────────────────────────────────────────────────
    "Delivery": {
        "type": "object",
        "properties": {
            "id": _uuid("Unique delivery id"),
            "userId": _uuid("Customer who owns the delivery"),
            "description": _DELIVERY_DESCRIPTION,
            "status": ref("DeliveryStatus"),
            "createdAt": _timestamp("When the delivery was created"),
            "updatedAt": _timestamp("Last update of the delivery", nullable=True),
            "user": {
                "type": "object",
                "nullable": True,
                "properties": {
                    "name": {"type": "string", "example": "João Silva"},
                    "email": {"type": "string", "format": "email", "example": "joao@example.com"},
                },
                "description": "Owner summary (when included in the response)",
            },
            "logs": {
                "type": "array",
                "nullable": True,
                "items": ref("DeliveryLog"),
                "description": "Tracking logs (when included in the response)",
            },
        },
        "required": ["id", "userId", "description", "status", "createdAt"],
    },
    "CreateDeliveryRequest": {
        "type": "object",
        "properties": {
            "user_id": _uuid("Customer the delivery is created for"),
            "description": _DELIVERY_DESCRIPTION,
        },
        "required": ["user_id", "description"],
    },
    "UpdateDeliveryStatusRequest": {
        "type": "object",
        "properties": {
            "id": _uuid("Delivery to update"),
            "status": ref("DeliveryStatus"),
        },
        "required": ["id", "status"],
    },
    "DeliveriesListResponse": {
        "type": "object",
        "properties": {
            "deliveries": {"type": "array", "items": ref("Delivery")},
        },
        "required": ["deliveries"],
    },
    # ── Delivery logs ─────────────────────────────────────────────────────
    "DeliveryLog": {
        "type": "object",
        "properties": {
            "id": _uuid("Unique log id"),
            "description": _LOG_DESCRIPTION,
            "deliveryId": _uuid("Delivery the log belongs to"),
            "createdAt": _timestamp("When the log was created"),
            "updatedAt": _timestamp("Last update of the log", nullable=True),
        },
        "required": ["id", "description", "deliveryId", "createdAt"],
    },
    "DeliveryLogPartial": {
        "type": "object",
        "properties": {
            "description": _LOG_DESCRIPTION,
            "updatedAt": _timestamp("Last update of the log", nullable=True),
        },
        "required": ["description"],
        "description": "Partial log, as embedded in a Delivery",
    },
    "CreateDeliveryLogRequest": {
        "type": "object",
        "properties": {
            "delivery_id": _uuid("Delivery to append the log to"),
            "description": _LOG_DESCRIPTION,
        },
        "required": ["delivery_id", "description"],
    },
    "DeliveryWithLogsResponse": {
        "allOf": [ref("Delivery")],
        "description": "Delivery with its logs and owner summary",
    },
    # ── Errors ────────────────────────────────────────────────────────────
    "ValidationError": {
        "type": "object",
        "properties": {
            "message": {"type": "string", "example": "validation error:"},
            "issues": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "field": {
                            "type": "string",
                            "description": "Field that failed validation",
                            "example": "email",
                        },
                        "message": {
                            "type": "string",
                            "description": "Validation message",
                            "example": "Invalid email",
                        },
                        "code": {
                            "type": "string",
                            "description": "Validation error code",
                            "example": "invalid_string",
                        },
                    },
                    "required": ["field", "message", "code"],
                },
            },
        },
        "required": ["message", "issues"],
        "description": "Returned when the request data fails validation",
    },
    "AppError": {
        "type": "object",
        "properties": {
            "message": {
                "type": "string",
                "description": "Application error message",
                "example": "Invalid credentials",
            },
        },
        "required": ["message"],
        "description": "Expected failure raised by the application",
    },
    "ServerError": {
        "type": "object",
        "properties": {
            "message": {
                "type": "string",
                "description": "Generic server error message",
                "example": "Internal server error",
            },
        },
        "required": ["message"],
        "description": "Unexpected server failure (status 500)",
    },
}
