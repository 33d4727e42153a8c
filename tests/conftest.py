import pytest

from lcond.context import RenderContext


@pytest.fixture(autouse=True)
def _no_env_overrides(monkeypatch):
    # the override would change every default-config test
    monkeypatch.delenv("LCOND_ERROR_MODE", raising=False)
    monkeypatch.delenv("LCOND_DEBUG", raising=False)


@pytest.fixture
def context() -> RenderContext:
    """Context with the variables most condition tests use."""
    return RenderContext({
        "user": {"name": "Bob", "admin": True, "roles": ["editor", "viewer"], "age": 42},
        "product": {"title": "Shoes", "tags": ["sale", "new"], "price": 9.5},
        "count": 3,
        "zero": 0,
        "empty_string": "",
        "nothing": None,
        "no": False,
        "yes": True,
        "items": [1, 2, 3],
        "blank_string": "   ",
    })
