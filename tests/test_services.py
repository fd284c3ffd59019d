"""
OrderHub — Service Unit Tests
==============================

What:  Business logic of the services, without HTTP or a real database.
How:   Mock AsyncSession (see conftest.mock_db_session); flush is given a
       side effect that fills in the defaults the database layer would.

What we test:
    ✅ Sign-up hashes the password and rejects duplicate emails
    ✅ IntegrityError on flush becomes ConflictError
    ✅ Other SQLAlchemy errors become DatabaseError
    ✅ Login rejects unknown users and wrong passwords identically
    ✅ Status change appends a log with the status as description
    ✅ Customers are refused foreign deliveries
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from orderhub import models
from orderhub.dependencies import AuthenticatedUser
from orderhub.exceptions import ConflictError, DatabaseError, ForbiddenError, NotFoundError, UnauthorizedError
from orderhub.models.delivery import DeliveryStatus
from orderhub.models.user import UserRole
from orderhub.schemas.delivery import UpdateDeliveryStatusRequest
from orderhub.schemas.session import CreateSessionRequest
from orderhub.schemas.user import CreateUserRequest
from orderhub.services.auth_service import auth_service
from orderhub.services.delivery_log_service import DeliveryLogService
from orderhub.services.delivery_service import DeliveryService
from orderhub.services.session_service import SessionService
from orderhub.services.user_service import UserService


def _populate_added(session):
    """Give every object passed to session.add the id/created_at a flush would."""

    async def flush():
        for call in session.add.call_args_list:
            obj = call.args[0]
            if getattr(obj, "id", None) is None:
                obj.id = uuid.uuid4()
            if getattr(obj, "created_at", None) is None:
                obj.created_at = datetime.now(timezone.utc)

    return flush


def _scalar_result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def _stored_user(role=UserRole.CUSTOMER, password="senha123"):
    return models.User(
        id=uuid.uuid4(),
        name="João Silva",
        email="joao@example.com",
        password=auth_service.hash_password(password),
        role=role,
        created_at=datetime.now(timezone.utc),
    )


class TestUserService:

    def setup_method(self):
        self.service = UserService()
        self.payload = CreateUserRequest(
            name="João Silva", email="joao@example.com", password="senha123"
        )

    @pytest.mark.asyncio
    async def test_create_user_hashes_password(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(None)
        mock_db_session.flush = AsyncMock(side_effect=_populate_added(mock_db_session))

        result = await self.service.create_user(mock_db_session, self.payload)

        stored = mock_db_session.add.call_args.args[0]
        assert stored.password != "senha123"
        assert auth_service.verify_password("senha123", stored.password)
        assert result.new_user.email == "joao@example.com"
        assert result.new_user.role == UserRole.CUSTOMER
        assert "password" not in result.model_dump(by_alias=True)["newUser"]

    @pytest.mark.asyncio
    async def test_existing_email_conflicts(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(uuid.uuid4())

        with pytest.raises(ConflictError) as exc_info:
            await self.service.create_user(mock_db_session, self.payload)

        assert exc_info.value.status_code == 409
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_integrity_error_conflicts(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(None)
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("unique"))
        )

        with pytest.raises(ConflictError):
            await self.service.create_user(mock_db_session, self.payload)

    @pytest.mark.asyncio
    async def test_other_database_errors(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("down"))
        )

        with pytest.raises(DatabaseError):
            await self.service.create_user(mock_db_session, self.payload)


class TestSessionService:

    def setup_method(self):
        self.service = SessionService()

    @pytest.mark.asyncio
    async def test_valid_credentials(self, mock_db_session):
        user = _stored_user(role=UserRole.SALE)
        mock_db_session.execute.return_value = _scalar_result(user)

        result = await self.service.create_session(
            mock_db_session, CreateSessionRequest(email=user.email, password="senha123")
        )

        claims = auth_service.decode_token(result.token)
        assert claims["sub"] == str(user.id)
        assert claims["role"] == "sale"
        assert result.user_without_password.id == user.id

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(_stored_user())

        with pytest.raises(UnauthorizedError) as exc_info:
            await self.service.create_session(
                mock_db_session,
                CreateSessionRequest(email="joao@example.com", password="errada"),
            )

        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_unknown_email(self, mock_db_session):
        mock_db_session.execute.return_value = _scalar_result(None)

        with pytest.raises(UnauthorizedError) as exc_info:
            await self.service.create_session(
                mock_db_session,
                CreateSessionRequest(email="nobody@example.com", password="senha123"),
            )

        assert exc_info.value.message == "Invalid credentials"


class TestDeliveryService:

    def setup_method(self):
        self.service = DeliveryService()

    @pytest.mark.asyncio
    async def test_update_status_appends_log(self, mock_db_session):
        delivery = models.Delivery(
            id=uuid.uuid4(),
            user_id=uuid.uuid4(),
            description="Notebook",
            status=DeliveryStatus.ACCEPTED,
            created_at=datetime.now(timezone.utc),
        )
        mock_db_session.get.return_value = delivery

        result = await self.service.update_status(
            mock_db_session,
            UpdateDeliveryStatusRequest(id=delivery.id, status=DeliveryStatus.PRODUCTION),
        )

        assert result.status == DeliveryStatus.PRODUCTION
        assert result.updated_at is not None
        log = mock_db_session.add.call_args.args[0]
        assert isinstance(log, models.DeliveryLog)
        assert log.delivery_id == delivery.id
        assert log.description == "production"

    @pytest.mark.asyncio
    async def test_update_status_unknown_delivery(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.update_status(
                mock_db_session,
                UpdateDeliveryStatusRequest(id=uuid.uuid4(), status=DeliveryStatus.SHIPPED),
            )

        mock_db_session.add.assert_not_called()


class TestDeliveryLogService:

    def setup_method(self):
        self.service = DeliveryLogService()

    @pytest.mark.asyncio
    async def test_customer_cannot_view_foreign_delivery(self, mock_db_session):
        owner = _stored_user()
        delivery = models.Delivery(
            id=uuid.uuid4(),
            user_id=owner.id,
            description="Notebook",
            status=DeliveryStatus.SHIPPED,
            created_at=datetime.now(timezone.utc),
        )
        mock_db_session.execute.return_value = _scalar_result(delivery)
        stranger = AuthenticatedUser(id=uuid.uuid4(), role=UserRole.CUSTOMER)

        with pytest.raises(ForbiddenError) as exc_info:
            await self.service.show(mock_db_session, delivery.id, viewer=stranger)

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "The user can only view their own deliveries"
