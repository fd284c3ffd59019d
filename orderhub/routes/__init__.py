# Routes package init
"""
OrderHub — API Routes Package
==============================

Route Inventory:
    - users.py:          POST  /users                              (sign up)
    - sessions.py:       POST  /sessions                           (login, JWT)
    - deliveries.py:     POST  /deliveries                         (sale)
                         GET   /deliveries                         (sale)
                         PATCH /deliveries/status                  (sale)
    - delivery_logs.py:  POST  /delivery-logs                      (sale)
                         GET   /delivery-logs/{delivery_id}/show   (customer, sale)
    - health.py:         GET   /health                             (health check, undocumented)

Routes stay thin: parse the request, check the role, call a service.
"""
