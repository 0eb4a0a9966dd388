from __future__ import annotations

from typing import Callable

import pytest

from fakes import FakeResponse, FakeSession, route


@pytest.fixture()
def make_session() -> Callable[[dict[str, FakeResponse]], FakeSession]:
    return lambda table: FakeSession(route(table))
