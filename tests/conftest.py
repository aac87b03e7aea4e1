from collections.abc import Generator

import pytest

from pydbquery.sql import clear_template_cache


@pytest.fixture(autouse=True)
def _fresh_template_cache() -> Generator[None, None, None]:
    clear_template_cache()
    yield
    clear_template_cache()
