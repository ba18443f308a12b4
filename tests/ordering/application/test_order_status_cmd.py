"""Application tests for cancellation and admin status updates."""

import pytest
from canteen.exceptions import ConflictError, NotFoundError
from canteen.ordering.order.order import Order, OrderStatus
from canteen.ordering.order.status import CancelOrder, UpdateOrderStatus
from protean import current_domain


@pytest.fixture()
def placed_order(make_user, make_menu_item):
    from canteen.ordering.cart.items import AddToCart
    from canteen.ordering.order.placement import PlaceOrder

    user = make_user()
    item = make_menu_item(price=100.0)
    current_domain.process(AddToCart(user_id=str(user.id), menu_item_id=str(item.id), quantity=1), asynchronous=False)
    order_id = current_domain.process(PlaceOrder(user_id=str(user.id)), asynchronous=False)
    return user, order_id


def _status(order_id):
    return current_domain.repository_for(Order).get(order_id).status


def _update(order_id, status):
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)


class TestCancelOrder:
    def test_owner_cancels_pending_order(self, placed_order):
        user, order_id = placed_order
        current_domain.process(CancelOrder(user_id=str(user.id), order_id=order_id), asynchronous=False)
        assert _status(order_id) == OrderStatus.CANCELLED.value

    def test_cancel_after_preparation_started_is_rejected(self, placed_order):
        user, order_id = placed_order
        _update(order_id, "Preparing")

        with pytest.raises(ConflictError) as exc:
            current_domain.process(CancelOrder(user_id=str(user.id), order_id=order_id), asynchronous=False)

        assert exc.value.messages == {"status": ["Can only cancel pending orders"]}
        assert _status(order_id) == OrderStatus.PREPARING.value

    def test_other_users_cannot_see_the_order(self, placed_order, make_user):
        _, order_id = placed_order
        stranger = make_user(email="stranger@campus.edu")
        with pytest.raises(NotFoundError):
            current_domain.process(CancelOrder(user_id=str(stranger.id), order_id=order_id), asynchronous=False)
        assert _status(order_id) == OrderStatus.PENDING.value


class TestUpdateOrderStatus:
    def test_ready_records_actual_ready_time(self, placed_order):
        _, order_id = placed_order
        _update(order_id, "Preparing")
        _update(order_id, "Ready")

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.READY.value
        assert order.actual_ready_time is not None

    def test_completed_order_cannot_be_reopened(self, placed_order):
        _, order_id = placed_order
        _update(order_id, "Completed")
        with pytest.raises(ConflictError):
            _update(order_id, "Preparing")

    def test_unknown_order(self):
        with pytest.raises(NotFoundError) as exc:
            _update("missing", "Preparing")
        assert exc.value.messages == {"_entity": ["Order not found"]}
