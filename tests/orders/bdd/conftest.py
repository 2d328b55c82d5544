"""Shared BDD fixtures and step definitions for the Orders domain."""

import json

import pytest
from orders.exceptions import ForbiddenError
from orders.order.cancellation import CancelOrder
from orders.order.creation import CreateOrder
from orders.order.order import Order
from orders.order.status import UpdateOrderStatus
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then, when


def _process(command):
    return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def customers(alice, bob, admin):
    return {"alice": alice, "bob": bob, "admin": admin}


@pytest.fixture()
def outcome():
    """Container for the error raised by the last action, if any."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('"{name}" placed an order for {quantity:d} "{product}" at {price:f}'),
    target_fixture="order",
)
def _(customers, name, quantity, product, price):
    principal = customers[name]
    return _process(
        CreateOrder(
            user_id=principal.user_id,
            items=json.dumps([{"product_name": product, "quantity": quantity, "price": price}]),
            requested_by=principal.user_id,
            roles=principal.role_names,
        )
    )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
def _attempt(outcome, order, command):
    outcome["exc"] = None
    try:
        return _process(command)
    except (ValidationError, InvalidOperationError, ObjectNotFoundError, ForbiddenError) as exc:
        outcome["exc"] = exc
        return order


@given(parsers.cfparse('"{name}" moved the order to "{status}"'), target_fixture="order")
@when(parsers.cfparse('"{name}" moves the order to "{status}"'), target_fixture="order")
def _(customers, outcome, order, name, status):
    principal = customers[name]
    command = UpdateOrderStatus(
        order_id=order.id, status=status, requested_by=principal.user_id, roles=principal.role_names
    )
    return _attempt(outcome, order, command)


@when(parsers.cfparse('"{name}" cancels the order'), target_fixture="order")
def _(customers, outcome, order, name):
    principal = customers[name]
    command = CancelOrder(order_id=order.id, requested_by=principal.user_id, roles=principal.role_names)
    return _attempt(outcome, order, command)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order, status):
    assert current_domain.repository_for(Order).get(order.id).status == status


@then(parsers.cfparse("the order total is {total:f}"))
def _(order, total):
    assert order.total_amount == total


@then("the action is rejected as an invalid operation")
def _(outcome):
    assert isinstance(outcome["exc"], InvalidOperationError), outcome["exc"]


@then("the action is rejected as a validation error")
def _(outcome):
    assert isinstance(outcome["exc"], ValidationError), outcome["exc"]
