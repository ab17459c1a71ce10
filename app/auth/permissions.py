"""
Actions each role may perform, checked by ``role_required("Role:action")``.
"""
from models.enums import Role

ROLE_SCOPES = {
    Role.wholesaler.value: {"create_order", "update_order_status", "delete_order"},
    Role.retailer.value: set(),
    Role.admin.value: {"*"},
}


def role_has_scope(role: str, action: str) -> bool:
    scopes = ROLE_SCOPES.get(role, set())
    return "*" in scopes or action in scopes
