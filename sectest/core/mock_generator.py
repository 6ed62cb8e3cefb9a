"""Mock data factories for tests.

Each factory returns a fresh record merged with ``overrides``; nothing is
kept between calls. Pass ``seed`` to get reproducible IDs and values.
"""

from __future__ import annotations

import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

PRODUCT_CATEGORIES = ("electronics", "clothing", "books", "home")
ORDER_STATUSES = ("pending", "processing", "shipped", "delivered")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _merge(base: dict[str, Any], overrides: dict[str, Any] | None) -> dict[str, Any]:
    if overrides:
        base.update(overrides)
    return base


def _chainable(name: str) -> MagicMock:
    """A mock whose methods return the mock itself, like an Express response."""
    mock = MagicMock(name=name)
    for method in ("status", "json", "send", "set_header", "cookie", "clear_cookie", "redirect"):
        getattr(mock, method).return_value = mock
    return mock


class MockGenerator:
    """Factory for users, products, orders and request/response doubles.

    Args:
        seed: Seed for the private random generator. ``None`` uses system
            entropy.
    """

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def generate_id(self) -> str:
        """Random UUID4 string drawn from this generator's random source."""
        return str(uuid.UUID(int=self._random.getrandbits(128), version=4))

    def create_mock_user(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        now = _now()
        user = {
            "id": self.generate_id(),
            "email": f"user{self.generate_id()}@example.com",
            "name": f"User {self.generate_id()}",
            "role": "user",
            "is_active": True,
            "created_at": now,
            "updated_at": now,
            "profile": {
                "avatar": f"https://api.dicebear.com/7.x/avataaars/svg?seed={self.generate_id()}",
                "bio": "Mock user bio",
                "location": "Mock City, MC",
                "website": "https://example.com",
            },
            "preferences": {"theme": "light", "notifications": True, "language": "en"},
        }
        return _merge(user, overrides)

    def create_mock_product(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        now = _now()
        product = {
            "id": self.generate_id(),
            "name": f"Product {self.generate_id()}",
            "description": "Mock product description",
            "price": self._random.randint(10, 1009),
            "category": self._random.choice(PRODUCT_CATEGORIES),
            "in_stock": self._random.random() > 0.3,
            "rating": round(self._random.uniform(0, 5), 1),
            "images": [
                f"https://picsum.photos/400/300?random={self.generate_id()}",
                f"https://picsum.photos/400/300?random={self.generate_id()}",
            ],
            "tags": ["mock", "test", "product"],
            "created_at": now,
            "updated_at": now,
        }
        return _merge(product, overrides)

    def create_mock_order(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        now = _now()
        order = {
            "id": self.generate_id(),
            "user_id": self.generate_id(),
            "items": [
                {
                    "product_id": self.generate_id(),
                    "quantity": self._random.randint(1, 5),
                    "price": self._random.randint(10, 109),
                }
            ],
            "total": self._random.randint(50, 549),
            "status": self._random.choice(ORDER_STATUSES),
            "shipping_address": {
                "street": "123 Mock Street",
                "city": "Mock City",
                "state": "MC",
                "zip_code": "12345",
                "country": "Mock Country",
            },
            "payment_method": "credit_card",
            "created_at": now,
            "updated_at": now,
        }
        return _merge(order, overrides)

    def create_mock_auth(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        auth = {
            "user": self.create_mock_user(),
            "token": f"mock-jwt-token-{self.generate_id()}",
            "refresh_token": f"mock-refresh-token-{self.generate_id()}",
            "expires_at": (datetime.now(timezone.utc) + timedelta(hours=1)).isoformat(),
            "is_authenticated": True,
            "permissions": ["read", "write"],
            "roles": ["user"],
        }
        return _merge(auth, overrides)

    def create_mock_api_response(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        response = {
            "success": True,
            "data": None,
            "message": "Mock API response",
            "timestamp": _now(),
            "status_code": 200,
        }
        return _merge(response, overrides)

    def create_mock_database(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """Async database double; ``transaction`` awaits and returns its callback."""

        async def run_transaction(callback):
            return await callback()

        database = {
            "connect": AsyncMock(return_value={"success": True}),
            "disconnect": AsyncMock(return_value={"success": True}),
            "query": AsyncMock(return_value=[]),
            "transaction": AsyncMock(side_effect=run_transaction),
            "is_connected": True,
        }
        return _merge(database, overrides)

    def create_mock_firebase(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        current_user = self.create_mock_user()

        def on_auth_state_changed(callback):
            callback(current_user)
            return lambda: None

        document = MagicMock(name="document")
        document.get = AsyncMock(return_value={"data": current_user})
        document.set = AsyncMock(return_value=None)
        document.update = AsyncMock(return_value=None)
        document.delete = AsyncMock(return_value=None)

        collection = MagicMock(name="collection")
        collection.doc.return_value = document
        collection.add = AsyncMock(return_value={"id": self.generate_id()})
        for method in ("where", "order_by", "limit"):
            getattr(collection, method).return_value = collection
        collection.get = AsyncMock(return_value={"docs": [{"id": self.generate_id(), "data": current_user}]})

        storage_ref = MagicMock(name="storage_ref")
        storage_ref.put = AsyncMock(return_value={"url": "mock-url"})
        storage_ref.get_download_url = AsyncMock(return_value="mock-url")

        firebase = {
            "auth": {
                "sign_in_with_email_and_password": AsyncMock(
                    return_value={"user": current_user, "credential": {"access_token": "mock-access-token"}}
                ),
                "sign_out": AsyncMock(return_value=None),
                "on_auth_state_changed": MagicMock(side_effect=on_auth_state_changed),
                "current_user": current_user,
            },
            "firestore": {"collection": MagicMock(return_value=collection)},
            "storage": {"ref": MagicMock(return_value=storage_ref)},
        }
        return _merge(firebase, overrides)

    def create_mock_request(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        request = {
            "method": "GET",
            "url": "/api/mock",
            "headers": {"content-type": "application/json", "authorization": "Bearer mock-token"},
            "body": {},
            "params": {},
            "query": {},
            "user": self.create_mock_user(),
        }
        return _merge(request, overrides)

    def create_mock_response(self, overrides: dict[str, Any] | None = None) -> MagicMock:
        """Response double whose methods chain; overrides become attributes."""
        response = _chainable("response")
        for name, value in (overrides or {}).items():
            setattr(response, name, value)
        return response

    def create_mock_error(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        error = {
            "name": "MockError",
            "message": "Mock error message",
            "status_code": 500,
            "code": "MOCK_ERROR",
            "stack": "Mock error stack trace",
        }
        return _merge(error, overrides)

    def create_mock_form_data(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        form = {
            "email": "test@example.com",
            "password": "mockPassword123!",
            "name": "Mock User",
            "age": 25,
            "agree_to_terms": True,
            "preferences": ["option1", "option2"],
        }
        return _merge(form, overrides)

    def create_mock_file_upload(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        upload = {
            "fieldname": "file",
            "originalname": "mock-file.jpg",
            "encoding": "7bit",
            "mimetype": "image/jpeg",
            "size": 1024 * 1024,
            "buffer": b"mock file content",
            "destination": "/tmp/",
            "filename": "mock-file.jpg",
            "path": "/tmp/mock-file.jpg",
        }
        return _merge(upload, overrides)

    def create_mock_validation_error(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        error = {
            "name": "ValidationError",
            "message": "Validation failed",
            "errors": [
                {"field": "email", "message": "Email is required", "value": ""},
                {"field": "password", "message": "Password must be at least 8 characters", "value": "123"},
            ],
        }
        return _merge(error, overrides)

    def generate_data_set(self, size: int = 10, kind: str = "users") -> list[dict[str, Any]]:
        """``size`` records of ``kind`` (users, products or orders; anything else gives users)."""
        factories = {
            "users": self.create_mock_user,
            "products": self.create_mock_product,
            "orders": self.create_mock_order,
        }
        factory = factories.get(kind, self.create_mock_user)
        return [factory() for _ in range(size)]
