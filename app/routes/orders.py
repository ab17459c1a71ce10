from flask import Blueprint, request
from app.version import API_PREFIX
from app.services import orders as order_service
from app.utils import auth_required, created, current_identity, json_body, ok, role_required

orders_bp = Blueprint("orders", __name__, url_prefix=f"{API_PREFIX}/orders")


@orders_bp.before_request
@auth_required
@role_required("Wholesaler")
def _enforce_wholesaler_role():
    """Ensure the requester is an authenticated wholesaler."""
    return None


@orders_bp.route("", methods=["POST"])
@role_required("Wholesaler:create_order")
def create_order():
    order = order_service.create_order(current_identity(), json_body())
    return created({"order": order.to_dict()}, message="Order created successfully")


@orders_bp.route("", methods=["GET"])
def list_orders():
    orders = order_service.list_orders(current_identity())
    return ok({"orders": [o.to_dict() for o in orders]}, message="Orders retrieved successfully")


@orders_bp.route("/search/filter", methods=["GET"])
def search_orders():
    """Filter the wholesaler's orders.
    ---
    tags:
      - Orders
    parameters:
      - {in: query, name: status, type: string}
      - {in: query, name: retailerId, type: string}
      - {in: query, name: fromDate, type: string, format: date-time}
      - {in: query, name: toDate, type: string, format: date-time}
      - {in: query, name: minTotal, type: number}
      - {in: query, name: maxTotal, type: number}
      - {in: query, name: paymentMethod, type: string}
      - {in: query, name: vehicleNumber, type: string}
    responses:
      200:
        description: Matching orders, newest first (possibly empty)
      400:
        description: Malformed filter value
    """
    orders = order_service.search_orders(current_identity(), request.args.to_dict())
    return ok({"orders": [o.to_dict() for o in orders]}, message="Orders retrieved successfully")


@orders_bp.route("/<order_id>", methods=["GET"])
def get_order(order_id):
    order = order_service.get_order(current_identity(), order_id)
    return ok({"order": order.to_dict()}, message="Order retrieved successfully")


@orders_bp.route("/<order_id>/status", methods=["PATCH"])
@role_required("Wholesaler:update_order_status")
def update_order_status(order_id):
    order = order_service.update_order_status(current_identity(), order_id, json_body())
    return ok({"order": order.to_dict()}, message="Order status updated successfully")


@orders_bp.route("/<order_id>", methods=["DELETE"])
@role_required("Wholesaler:delete_order")
def delete_order(order_id):
    order_service.delete_order(current_identity(), order_id)
    return ok(message="Order deleted successfully")
