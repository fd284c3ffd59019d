"""
OrderHub — Delivery Tracking API
=================================

What: REST backend for users, sessions, deliveries and delivery logs.
Who:  Imported by uvicorn (`orderhub.main:app`), Alembic and pytest.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, role guards
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← ownership, status changes, auth
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    orderhub.docs holds the hand-written API document components.
"""

__version__ = "1.0.0"
