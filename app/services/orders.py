"""Order workflow for the authenticated wholesaler.

Every function takes the caller's ``Identity`` and only ever touches orders
whose ``wholesaler_id`` is that identity's account.
"""
import logging
from typing import List
from models import db, is_valid_id
from models.order import Order
from app.exceptions import NotFound, ValidationError
from app.schemas.order import CreateOrderRequest, OrderSearchParams, UpdateOrderStatusRequest
from app.utils import Identity, has_required_fields, parse_payload, transactional

logger = logging.getLogger(__name__)

REQUIRED_ORDER_FIELDS = ("retailerId", "products", "deliveryAddress", "orderTotal")
DEFAULT_PAYMENT_METHOD = "cod"


def _scoped(identity: Identity):
    return Order.query.filter_by(wholesaler_id=identity.account_id)


def _newest_first(query):
    return query.order_by(Order.created_at.desc(), Order.id.desc())


def get_order(identity: Identity, order_id: str) -> Order:
    order = _scoped(identity).filter_by(id=order_id).first() if is_valid_id(order_id) else None
    if not order:
        raise NotFound("Order not found")
    return order


def list_orders(identity: Identity) -> List[Order]:
    """All orders for the wholesaler. An empty result is a 404."""
    orders = _newest_first(_scoped(identity)).all()
    if not orders:
        raise NotFound("No orders found for this wholesaler")
    return orders


def create_order(identity: Identity, data: dict) -> Order:
    if not has_required_fields(data, REQUIRED_ORDER_FIELDS):
        raise ValidationError("Missing required fields")
    req = parse_payload(CreateOrderRequest, data)
    order = Order(
        wholesaler_id=identity.account_id,
        retailer_id=req.retailerId,
        products=req.products,
        delivery_address=req.deliveryAddress,
        delivery_date=req.deliveryDate,
        order_total=req.orderTotal,
        payment_method=req.paymentMethod or DEFAULT_PAYMENT_METHOD,
        notes=req.notes,
        vehicle_number=req.vehicleNumber,
    )
    with transactional("Failed to create order"):
        db.session.add(order)
    logger.info("Order %s created by wholesaler %s", order.id, identity.account_id)
    return order


def update_order_status(identity: Identity, order_id: str, data: dict) -> Order:
    """Write a new status. Any settable status may replace any other."""
    payload = dict(data or {})
    payload.setdefault("status", None)
    req = parse_payload(UpdateOrderStatusRequest, payload)
    order = get_order(identity, order_id)
    order.status = req.status
    if req.cancellationReason:
        order.cancellation_reason = req.cancellationReason
    if req.notes:
        order.notes = req.notes
    with transactional("Failed to update order status"):
        db.session.add(order)
    logger.info("Order %s marked %s", order.id, req.status.value)
    return order


def delete_order(identity: Identity, order_id: str) -> None:
    order = get_order(identity, order_id)
    with transactional("Failed to delete order"):
        db.session.delete(order)
    logger.info("Order %s deleted by wholesaler %s", order_id, identity.account_id)


def search_orders(identity: Identity, params: dict) -> List[Order]:
    """Conjunctive filter over the wholesaler's orders; no pagination."""
    f = parse_payload(OrderSearchParams, params)
    query = _scoped(identity)
    if f.status is not None:
        query = query.filter(Order.status == f.status)
    if f.retailerId:
        query = query.filter(Order.retailer_id == f.retailerId)
    if f.fromDate is not None:
        query = query.filter(Order.created_at >= f.fromDate)
    if f.toDate is not None:
        query = query.filter(Order.created_at <= f.toDate)
    if f.minTotal is not None:
        query = query.filter(Order.order_total >= f.minTotal)
    if f.maxTotal is not None:
        query = query.filter(Order.order_total <= f.maxTotal)
    if f.paymentMethod:
        query = query.filter(Order.payment_method == f.paymentMethod)
    if f.vehicleNumber:
        query = query.filter(Order.vehicle_number == f.vehicleNumber)
    return _newest_first(query).all()
