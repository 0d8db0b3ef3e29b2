"""Pytest fixtures for matrix tests."""

import pytest


@pytest.fixture
def catalog():
    """Built-in relationship catalog."""
    from tracegrid.matrix import RelationshipCatalog

    return RelationshipCatalog()


@pytest.fixture
def builder(catalog):
    """MatrixBuilder with a fixed clock."""
    from tests.core.matrix_test_helpers import fixed_builder

    return fixed_builder(catalog)


@pytest.fixture
def req_fn_symbols():
    """ReqA implements FnX."""
    from tests.core.matrix_test_helpers import make_symbol

    return [
        make_symbol("ReqA", "requirement", implements="ref function FnX"),
        make_symbol("FnX", "function"),
    ]


@pytest.fixture
def project_symbols():
    """A small model: requirements, functions, tests, a block and planning noise.

    - ReqA implements FnX, FnY; ReqB implements FnY and points at a missing FnZ
    - TC1 satisfies ReqA; TC2 satisfies nothing
    - FnX is allocated to BlkCore
    - a sprint task assigned to an agent (excluded from the matrix)
    """
    from tests.core.matrix_test_helpers import make_symbol

    return [
        make_symbol("ReqB", "requirement", implements="ref function FnY, FnZ"),
        make_symbol("ReqA", "requirement", implements=["ref function FnX", "ref function FnY"]),
        make_symbol("FnY", "function"),
        make_symbol("FnX", "function", allocatedto="ref block BlkCore"),
        make_symbol("TC1", "testcase", satisfies="ref requirement ReqA"),
        make_symbol("TC2", "testcase", description="Smoke test, no links"),
        make_symbol("BlkCore", "block"),
        make_symbol("Task1", "task", assignedto="ref agent Bot"),
        make_symbol("Bot", "agent"),
    ]
