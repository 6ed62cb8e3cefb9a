"""Tests for the DOM-like elements and framework stubs."""

import pytest

from sectest.testing.harness import (
    ControllerUtils,
    DOMUtils,
    IntegrationUtils,
    MockElement,
    NestUtils,
    ReactUtils,
)


@pytest.fixture
def form():
    form = MockElement("form", {"id": "login"})
    fieldset = form.append_child(MockElement("fieldset"))
    fieldset.append_child(MockElement("input", {"name": "email", "type": "email"}))
    fieldset.append_child(MockElement("input", {"name": "csrf_token", "type": "hidden"}))
    form.append_child(MockElement("button", {"type": "submit"}))
    return form


class TestMockElement:
    """Attributes, children and selectors."""

    def test_attributes(self):
        element = DOMUtils.create_mock_element("DIV", {"data-count": 3})
        assert element.tag_name == "div"
        assert element.has_attribute("data-count")
        assert element.get_attribute("data-count") == "3"
        assert element.get_attribute("missing") is None
        element.set_attribute("role", "dialog")
        assert element.has_attribute("role")

    def test_query_by_tag_and_attribute(self, form):
        match = form.query_selector('input[name="csrf_token"]')
        assert match is not None
        assert match.get_attribute("type") == "hidden"

    def test_query_single_quotes_and_unquoted(self, form):
        assert form.query_selector("input[name='email']") is not None
        assert form.query_selector("input[name=email]") is not None

    def test_query_attribute_presence(self, form):
        assert len(form.query_selector_all("[type]")) == 3

    def test_query_by_tag_in_document_order(self, form):
        names = [el.get_attribute("name") for el in form.query_selector_all("input")]
        assert names == ["email", "csrf_token"]

    def test_no_match_returns_none(self, form):
        assert form.query_selector('input[name="_token"]') is None

    def test_root_is_not_matched(self, form):
        assert form.query_selector("form") is None

    def test_unsupported_selector(self, form):
        with pytest.raises(ValueError, match="Unsupported selector"):
            form.query_selector("form > input")

    def test_create_form_with_token(self):
        form = DOMUtils.create_form(csrf_token="abc")
        assert form.query_selector('input[name="csrf_token"]').get_attribute("value") == "abc"


class TestFrameworkStubs:
    """React, NestJS, controller and integration helpers."""

    def test_test_providers_wrap_children(self):
        child = MockElement("span")
        wrapper = ReactUtils.create_test_providers(child)
        assert wrapper.get_attribute("data-testid") == "test-providers"
        assert wrapper.children == [child]

    def test_test_providers_accept_lists(self):
        wrapper = ReactUtils.create_test_providers([MockElement("a"), MockElement("b")])
        assert [c.tag_name for c in wrapper.children] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_testing_module(self):
        module = await NestUtils.create_testing_module({"providers": ["UsersService"]})
        assert module.get("UsersService") == {"token": "UsersService"}
        app = module.create_nest_application()
        await app.init()
        await app.close()
        app.init.assert_called_once()
        app.close.assert_called_once()

    def test_mock_request_defaults(self):
        request = ControllerUtils.create_mock_request()
        assert request["method"] == "GET"
        assert request["url"] == "/api/test"
        assert request["user"] is None

    def test_mock_request_overrides(self):
        request = ControllerUtils.create_mock_request({"method": "DELETE", "params": {"id": "1"}})
        assert request["method"] == "DELETE"
        assert request["params"] == {"id": "1"}
        assert request["query"] == {}

    @pytest.mark.asyncio
    async def test_full_stack_flow(self):
        result = await IntegrationUtils.test_full_stack_flow()
        assert result["success"] is True
        assert result["security_checks"]["passed"] is True
        assert result["coverage"] == {"frontend": 90, "backend": 95, "integration": 85}
