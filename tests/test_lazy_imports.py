"""Tests for the lazy top-level paydesk API."""

import pytest

import paydesk


class TestLazyImports:
    @pytest.mark.parametrize("name", paydesk.__all__)
    def test_public_names_resolve(self, name: str) -> None:
        assert getattr(paydesk, name) is not None

    def test_same_objects_as_modules(self) -> None:
        from paydesk.app import App
        from paydesk.errors import DuplicateRoute

        assert paydesk.App is App
        assert paydesk.DuplicateRoute is DuplicateRoute

    def test_unknown_attribute(self) -> None:
        with pytest.raises(AttributeError):
            paydesk.does_not_exist  # noqa: B018
