from flask import Blueprint
from app.version import API_PREFIX
from app.services import categories as category_service
from app.utils import auth_required, created, json_body, ok, role_required

categories_bp = Blueprint("categories", __name__, url_prefix=f"{API_PREFIX}/categories")


@categories_bp.route("", methods=["GET"])
def list_categories():
    categories = category_service.list_categories()
    return ok({"categories": [c.to_dict() for c in categories]}, message="Categories retrieved successfully")


@categories_bp.route("", methods=["POST"])
@auth_required
@role_required("Admin:manage_categories")
def create_category():
    category = category_service.create_category(json_body())
    return created({"category": category.to_dict()}, message="Category created successfully")
