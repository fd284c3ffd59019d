"""
OrderHub — ORM Models
======================

Importing this package registers every model with `Base.metadata`
(used by Alembic autogenerate and by the test suite's create_all).
"""

from orderhub.models.user import User, UserRole
from orderhub.models.delivery import Delivery, DeliveryLog, DeliveryStatus

__all__ = ["User", "UserRole", "Delivery", "DeliveryLog", "DeliveryStatus"]
