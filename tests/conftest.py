import pytest

from flowmark.session import get_session


@pytest.fixture(autouse=True)
def clean_session():
    """Every test starts with an empty flowed mode set."""
    get_session().clear()
    yield
    get_session().clear()
