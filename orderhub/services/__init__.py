# Services package init
"""
OrderHub — Services Layer
==========================

Service Inventory:
    - AuthService:         bcrypt hashing, JWT issue/verify
    - UserService:         sign up (duplicate email check)
    - SessionService:      login
    - DeliveryService:     create, list, status change (+ automatic log)
    - DeliveryLogService:  append logs, show a delivery with its history

Services take an AsyncSession from the route and flush; the request-scoped
session commits once the route returns.
"""
