from __future__ import annotations

from typing import Any

import pytest

from solr_query.builders import literal, term
from solr_query.contracts.elements import Term
from solr_query_validation.stubs import POINT, POLYGON


@pytest.fixture()
def lhs() -> Term:
    return term(literal("LHS"))


@pytest.fixture()
def rhs() -> Term:
    return term(literal("RHS"))


@pytest.fixture()
def rhs2() -> Term:
    return term(literal("RHS2"))


@pytest.fixture()
def rhs3() -> Term:
    return term(literal("RHS3"))


@pytest.fixture()
def rhs_number() -> Term:
    return term(literal(101))


@pytest.fixture(scope="session")
def point() -> dict[str, Any]:
    return POINT


@pytest.fixture(scope="session")
def polygon() -> dict[str, Any]:
    return POLYGON
