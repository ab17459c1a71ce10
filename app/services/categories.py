from models import db
from models.category import Category
from app.exceptions import Conflict
from app.schemas.category import CreateCategoryRequest
from app.utils import DuplicateKeyError, parse_payload, transactional


def list_categories():
    return Category.query.order_by(Category.name.asc()).all()


def create_category(data: dict) -> Category:
    req = parse_payload(CreateCategoryRequest, data)
    if Category.query.filter_by(name=req.name).first():
        raise Conflict("Category already exists")
    category = Category(name=req.name, description=req.description or None)
    try:
        with transactional("Failed to create category"):
            db.session.add(category)
    except DuplicateKeyError:
        raise Conflict("Category already exists")
    return category
