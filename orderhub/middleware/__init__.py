"""
OrderHub — Middleware Package
==============================

Cross-cutting concerns applied to every request.

Middleware Chain (request direction):
    Request → [CORS] → [Security Headers] → [Request ID] → [Access Log] → Route

    1. CORS: answers preflight OPTIONS requests, adds CORS headers
    2. Security headers: hardening headers on every response, errors included
    3. Request ID: correlation id in a ContextVar and the X-Request-ID header
    4. Access log: method, path, status and duration tagged with the request id
"""
