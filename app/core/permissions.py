"""User roles and module access."""

from copy import deepcopy
from enum import Enum
from typing import Any


class Role(str, Enum):
    """User roles in the system."""

    SUPERADMIN = "superadmin"  # Platform operator, manages schools
    ADMIN = "admin"  # Full access to the school
    ACCOUNTANT = "accountant"  # Finance operations
    TEACHER = "teacher"
    PARENT = "parent"
    STUDENT = "student"


# Roles allowed to manage school (tenant) records
SCHOOL_MANAGERS = (Role.SUPERADMIN, Role.ADMIN)


class AccessRole(str, Enum):
    """Role keys used in the settings.moduleAccess document."""

    TEACHERS = "teachers"
    PARENTS = "parents"
    ACCOUNTANT = "accountant"
    ADMIN = "admin"
    DEMO_USER = "demo_user"


class Feature(str, Enum):
    """Feature keys used in the settings.moduleAccess document."""

    DASHBOARD = "dashboard"
    STUDENTS = "students"
    TEACHERS = "teachers"
    CLASSES = "classes"
    SUBJECTS = "subjects"
    EXAMS = "exams"
    REPORT_CARDS = "reportCards"
    RANKINGS = "rankings"
    FINANCE = "finance"
    INVOICES = "invoices"
    ATTENDANCE = "attendance"
    RECORD_BOOK = "recordBook"
    SETTINGS = "settings"


DEFAULT_MODULE_ACCESS: dict[str, dict[str, bool]] = {
    "teachers": {
        "students": True,
        "classes": True,
        "subjects": True,
        "exams": True,
        "reportCards": True,
        "rankings": True,
        "finance": False,
        "settings": False,
        "recordBook": True,
        "attendance": True,
    },
    "parents": {
        "reportCards": True,
        "invoices": True,
        "dashboard": True,
    },
    "accountant": {
        "students": True,
        "invoices": True,
        "finance": True,
        "dashboard": True,
        "settings": False,
    },
    "admin": {
        "students": True,
        "teachers": True,
        "classes": True,
        "subjects": True,
        "exams": True,
        "reportCards": True,
        "rankings": True,
        "finance": True,
        "attendance": True,
        "settings": True,
        "dashboard": True,
    },
    "demo_user": {
        "dashboard": True,
        "students": True,
        "teachers": True,
        "classes": True,
        "subjects": True,
        "exams": True,
        "reportCards": True,
        "rankings": True,
        "finance": True,
        "attendance": True,
        "settings": False,
    },
}


# Which access-document key governs each user role
ROLE_ACCESS_KEYS = {
    Role.ADMIN.value: AccessRole.ADMIN,
    Role.ACCOUNTANT.value: AccessRole.ACCOUNTANT,
    Role.TEACHER.value: AccessRole.TEACHERS,
    Role.PARENT.value: AccessRole.PARENTS,
}


def default_module_access() -> dict[str, dict[str, bool]]:
    """Return a fresh copy of the default module access document."""
    return deepcopy(DEFAULT_MODULE_ACCESS)


def validate_module_access(document: Any) -> dict[str, dict[str, bool]]:
    """
    Validate a moduleAccess document against the closed role/feature sets.

    Raises ValueError naming the first unknown key or non-boolean flag.
    """
    if not isinstance(document, dict):
        raise ValueError("Module access must be a mapping of role to features")

    roles = {r.value for r in AccessRole}
    features = {f.value for f in Feature}
    validated: dict[str, dict[str, bool]] = {}

    for role, feature_map in document.items():
        if role not in roles:
            raise ValueError(f"Unknown role in module access: {role}")
        if not isinstance(feature_map, dict):
            raise ValueError(f"Module access for {role} must be a mapping")
        validated[role] = {}
        for feature, allowed in feature_map.items():
            if feature not in features:
                raise ValueError(f"Unknown feature in module access: {role}.{feature}")
            if not isinstance(allowed, bool):
                raise ValueError(f"Module access flag {role}.{feature} must be a boolean")
            validated[role][feature] = allowed

    return validated


def access_key_for(role: Role | str, is_demo: bool = False) -> AccessRole | None:
    """Map a user role (enum or stored string) to its moduleAccess key."""
    if is_demo:
        return AccessRole.DEMO_USER
    return ROLE_ACCESS_KEYS.get(role.value if isinstance(role, Role) else role)


def has_module_access(
    module_access: dict[str, dict[str, bool]] | None,
    role: Role,
    feature: Feature | str,
    *,
    is_demo: bool = False,
) -> bool:
    """Check whether a role may use a feature. Missing entries mean no access."""
    if role == Role.SUPERADMIN and not is_demo:
        return True

    key = access_key_for(role, is_demo)
    if key is None or not module_access:
        return False

    feature_name = feature.value if isinstance(feature, Feature) else feature
    return bool(module_access.get(key.value, {}).get(feature_name, False))
