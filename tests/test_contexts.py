"""Tests for the mock application contexts."""

import pytest

from sectest.testing import contexts
from sectest.testing.contexts import MockContextProvider, mock_contexts, mock_use_context


class TestContextFactories:
    """Default shapes and overrides."""

    @pytest.mark.asyncio
    async def test_auth_context(self):
        auth = contexts.create_mock_auth_context()
        assert auth["is_authenticated"] is True
        assert await auth["login"]("jane@example.com", "secret") == {"success": True}
        auth["login"].assert_awaited_once_with("jane@example.com", "secret")

    def test_overrides(self):
        auth = contexts.create_mock_auth_context({"is_authenticated": False, "user": None})
        assert auth["is_authenticated"] is False
        assert auth["user"] is None

    def test_fresh_mocks_per_call(self):
        first = contexts.create_mock_theme_context()
        second = contexts.create_mock_theme_context()
        first["toggle_theme"]()
        second["toggle_theme"].assert_not_called()

    def test_store_and_router(self):
        store = contexts.create_mock_store_context()
        assert store["state"] == {"user": None, "products": [], "cart": []}
        router = contexts.create_mock_router_context({"pathname": "/login"})
        router["push"]("/home")
        router["push"].assert_called_once_with("/home")
        assert router["pathname"] == "/login"

    def test_all_factories_registered(self):
        assert set(contexts.CONTEXT_FACTORIES) == {"auth", "theme", "store", "router", "notification"}


class TestMockContextProvider:
    """Provider lookup and lifetime."""

    def test_builds_contexts_on_demand(self):
        provider = MockContextProvider()
        assert provider.get("notification")["notifications"] == []
        assert provider.get("notification") is provider.get("notification")

    def test_explicit_context_wins(self):
        custom = {"theme": "dark"}
        assert MockContextProvider(theme=custom).get("theme") is custom

    def test_unknown_context(self):
        with pytest.raises(KeyError, match="weather"):
            MockContextProvider().get("weather")

    def test_mock_contexts_helper(self):
        with mock_contexts("auth", "theme") as provider:
            assert provider.get("theme")["theme"] == "light"
            assert provider.get("auth")["user"]["role"] == "user"

    def test_use_context_returns_value(self):
        value = {"theme": "dark"}
        use_context = mock_use_context(value)
        assert use_context("ThemeContext") is value
        use_context.assert_called_once_with("ThemeContext")
