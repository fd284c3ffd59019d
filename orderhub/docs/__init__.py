"""
OrderHub — API Documentation
=============================

    - schemas.py: static OpenAPI schema catalog (components.schemas)
    - openapi.py: document builder and route annotation helpers
"""
