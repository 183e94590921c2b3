"""
Permissions and Roles Configuration
This config defines the permission matrix for every resource and the
user_roles roles (member, staff, admin) that are granted each action.
"""

# Define resources and their actions
MODULES = {
    "orgs": {
        "resource": "orgs",
        "actions": ["create", "read", "update", "delete"],
        "description": "Organization management"
    },
    "locations": {
        "resource": "locations",
        "actions": ["create", "read", "update", "delete"],
        "description": "Location management"
    },
    "profiles": {
        "resource": "profiles",
        "actions": ["create", "read", "update", "delete"],
        "description": "Player profile management"
    },
    "users": {
        "resource": "users",
        "actions": ["create"],
        "description": "Account provisioning (auth user + profile)"
    },
    "user_roles": {
        "resource": "user_roles",
        "actions": ["create", "read", "update", "delete"],
        "description": "Role assignments per org/location"
    },
    "courts": {
        "resource": "courts",
        "actions": ["create", "read", "update", "delete"],
        "description": "Court management"
    }
}

# Highest first; a user holding several roles is resolved to the first match
ROLE_PRECEDENCE = ["admin", "staff", "member"]

# Actions granted per role, keyed by resource. "*" grants every action of the resource.
ROLE_TYPES = {
    "admin": {
        "grants": {resource: ["*"] for resource in MODULES},
        "description": "Full administrative access"
    },
    "staff": {
        "grants": {
            "orgs": ["read"],
            "locations": ["read"],
            "profiles": ["create", "read", "update"],
            "users": ["create"],
            "user_roles": ["read"],
            "courts": ["read"],
        },
        "description": "Front-desk access: manage players, read everything else"
    },
    "member": {
        "grants": {
            "orgs": ["read"],
            "locations": ["read"],
            "courts": ["read"],
        },
        "description": "Read-only access to venues"
    }
}


def get_permission_matrix():
    """
    Returns a dictionary with all permissions and the permissions of each role
    Format: {
        "permissions": [
            {"name": "orgs:create", "resource": "orgs", "action": "create", "description": "..."},
            ...
        ],
        "roles": {
            "admin": ["courts:create", ...],
            ...
        }
    }
    """
    permissions = []
    for module_config in MODULES.values():
        resource = module_config["resource"]
        for action in module_config["actions"]:
            permissions.append({
                "name": f"{resource}:{action}",
                "resource": resource,
                "action": action,
                "description": f"{action.capitalize()} {resource}"
            })

    roles = {}
    for role_name, role_config in ROLE_TYPES.items():
        role_permissions = []
        for resource, actions in role_config["grants"].items():
            allowed = MODULES[resource]["actions"] if "*" in actions else actions
            for action in allowed:
                if action in MODULES[resource]["actions"]:
                    role_permissions.append(f"{resource}:{action}")
        roles[role_name] = sorted(role_permissions)

    return {
        "permissions": permissions,
        "roles": roles
    }


PERMISSION_MATRIX = get_permission_matrix()


def all_permissions():
    return [p["name"] for p in PERMISSION_MATRIX["permissions"]]


def get_role_permissions(role):
    """Permission names for a role; unknown or missing roles get none."""
    if not role:
        return []
    return PERMISSION_MATRIX["roles"].get(role, [])


def highest_role(roles):
    for role in ROLE_PRECEDENCE:
        if role in roles:
            return role
    return None
