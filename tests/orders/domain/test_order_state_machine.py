"""Tests for the Order state machine: transitions, terminal states and cancellation."""

import time

import pytest
from orders.order.order import Order, OrderStatus
from protean.exceptions import InvalidOperationError, ValidationError

CREATED = OrderStatus.CREATED.value
IN_PROGRESS = OrderStatus.IN_PROGRESS.value
COMPLETED = OrderStatus.COMPLETED.value
CANCELLED = OrderStatus.CANCELLED.value


def _make_order():
    return Order.create(
        user_id="0d2c6c3b-1e6b-4f0e-8a57-3b1f4c1e2d9a",
        items=[{"productName": "A", "quantity": 2, "price": 10}],
    )


def _order_at_state(target_status):
    order = _make_order()
    if target_status == OrderStatus.CREATED:
        return order
    if target_status == OrderStatus.CANCELLED:
        order.cancel()
        return order
    order.transition_status(target_status)
    return order


# ---------------------------------------------------------------
# Happy path transitions
# ---------------------------------------------------------------
class TestValidTransitions:
    def test_created_to_in_progress(self):
        order = _order_at_state(OrderStatus.CREATED)
        previous = order.transition_status(OrderStatus.IN_PROGRESS)
        assert previous == CREATED
        assert order.status == IN_PROGRESS

    def test_in_progress_to_completed(self):
        order = _order_at_state(OrderStatus.IN_PROGRESS)
        order.transition_status(OrderStatus.COMPLETED)
        assert order.status == COMPLETED

    def test_accepts_raw_status_values(self):
        order = _make_order()
        order.transition_status("in_progress")
        assert order.status == IN_PROGRESS

    def test_backward_move_between_non_terminal_states(self):
        order = _order_at_state(OrderStatus.IN_PROGRESS)
        order.transition_status(OrderStatus.CREATED)
        assert order.status == CREATED

    def test_same_status_is_accepted(self):
        order = _make_order()
        order.transition_status(OrderStatus.CREATED)
        assert order.status == CREATED

    def test_cancelled_reachable_through_transition(self):
        order = _order_at_state(OrderStatus.IN_PROGRESS)
        order.transition_status("cancelled")
        assert order.status == CANCELLED

    def test_transition_refreshes_updated_at(self):
        order = _make_order()
        before = order.updated_at
        time.sleep(0.002)
        order.transition_status(OrderStatus.IN_PROGRESS)
        assert order.updated_at > before
        assert order.created_at == before


# ---------------------------------------------------------------
# Guards
# ---------------------------------------------------------------
class TestTerminalStates:
    @pytest.mark.parametrize("terminal", [OrderStatus.COMPLETED, OrderStatus.CANCELLED])
    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_no_transition_out_of_terminal_state(self, terminal, target):
        order = _order_at_state(terminal)
        updated_at = order.updated_at
        with pytest.raises(InvalidOperationError):
            order.transition_status(target)
        assert order.status == terminal.value
        assert order.updated_at == updated_at

    def test_terminal_check_precedes_status_validation(self):
        order = _order_at_state(OrderStatus.COMPLETED)
        with pytest.raises(InvalidOperationError):
            order.transition_status("shipped")

    def test_is_terminal(self):
        assert OrderStatus.COMPLETED.is_terminal
        assert OrderStatus.CANCELLED.is_terminal
        assert not OrderStatus.CREATED.is_terminal
        assert not OrderStatus.IN_PROGRESS.is_terminal


class TestUnknownStatus:
    @pytest.mark.parametrize("value", ["shipped", "", None, "CREATED", 3])
    def test_unknown_status_rejected(self, value):
        order = _make_order()
        with pytest.raises(ValidationError) as exc:
            order.transition_status(value)
        assert "status" in exc.value.messages
        assert order.status == CREATED

    def test_status_cannot_be_assigned_outside_the_allowed_values(self):
        order = _make_order()
        with pytest.raises(ValidationError):
            order.status = "shipped"


# ---------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------
class TestCancel:
    def test_cancel_from_created(self):
        order = _make_order()
        assert order.cancel() == CREATED
        assert order.status == CANCELLED

    def test_cancel_from_in_progress(self):
        order = _order_at_state(OrderStatus.IN_PROGRESS)
        assert order.cancel() == IN_PROGRESS
        assert order.status == CANCELLED

    def test_cannot_cancel_completed(self):
        order = _order_at_state(OrderStatus.COMPLETED)
        with pytest.raises(InvalidOperationError, match="completed"):
            order.cancel()
        assert order.status == COMPLETED

    def test_second_cancel_fails(self):
        order = _make_order()
        order.cancel()
        with pytest.raises(InvalidOperationError, match="already cancelled"):
            order.cancel()


def test_lifecycle_scenario():
    order = _make_order()
    assert order.total_amount == 20
    assert order.status == CREATED

    order.transition_status("in_progress")
    order.cancel()
    assert order.status == CANCELLED

    with pytest.raises(InvalidOperationError):
        order.cancel()
