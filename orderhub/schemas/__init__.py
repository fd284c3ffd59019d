"""
OrderHub — Pydantic Request/Response Schemas
=============================================

Class names match the entries of the OpenAPI schema catalog
(orderhub/docs/schemas.py) so the `$ref`s FastAPI generates for request
bodies and response models resolve against the catalog.

Responses serialize with camelCase aliases (createdAt, userId, newUser...);
request bodies keep the field names clients send (user_id, delivery_id).
"""
