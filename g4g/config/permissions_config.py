"""
Permissions and Roles Configuration
This config defines the permission matrix for all modules and the app roles
stored on profiles.role (admin, coach, soldier, user).
Used by core.dependencies.require_permission and exposed on /profiles/me.
"""

# Define modules and their actions
MODULES = {
    "profiles": {
        "resource": "profiles",
        "actions": ["read", "update", "roster", "manage"],
        "description": "Profile and fitness dossier management"
    },
    "workouts": {
        "resource": "workouts",
        "actions": ["create", "read", "update", "delete"],
        "description": "Tier-gated workout library"
    },
    "missions": {
        "resource": "missions",
        "actions": ["create", "read", "update", "delete"],
        "description": "Completed workout logs"
    },
    "recipes": {
        "resource": "recipes",
        "actions": ["create", "read", "update", "delete"],
        "description": "Recipe library"
    },
    "meal_plans": {
        "resource": "meal_plans",
        "actions": ["read", "update"],
        "description": "Meal planner calendar, templates and shopping lists"
    },
    "messages": {
        "resource": "messages",
        "actions": ["read", "send", "inbox"],
        "description": "Coach / trainee messaging"
    },
    "buddies": {
        "resource": "buddies",
        "actions": ["read", "request"],
        "description": "Buddy system"
    },
    "briefings": {
        "resource": "briefings",
        "actions": ["create", "read", "update", "delete"],
        "description": "Daily briefings shown on the dashboard"
    },
    "challenges": {
        "resource": "challenges",
        "actions": ["read", "join"],
        "description": "Community challenges"
    },
    "analytics": {
        "resource": "analytics",
        "actions": ["read", "update"],
        "description": "Stats page and body metrics"
    },
    "posts": {
        "resource": "posts",
        "actions": ["read", "create"],
        "description": "Formation feed posts, likes and comments"
    },
    "records": {
        "resource": "records",
        "actions": ["create", "read", "update", "delete"],
        "description": "Personal records"
    },
    "featured_meals": {
        "resource": "featured_meals",
        "actions": ["read", "manage"],
        "description": "Meal of the Day"
    },
    "coaches": {
        "resource": "coaches",
        "actions": ["update"],
        "description": "Public coach directory listing"
    }
}

# Actions every signed-in member (soldier / recruit) gets per module
MEMBER_ACTIONS = {
    "profiles": ["read", "update"],
    "workouts": ["read"],
    "missions": ["create", "read", "update", "delete"],
    "recipes": ["read"],
    "meal_plans": ["read", "update"],
    "messages": ["read", "send"],
    "buddies": ["read", "request"],
    "briefings": ["read"],
    "challenges": ["read", "join"],
    "analytics": ["read", "update"],
    "posts": ["read", "create"],
    "records": ["create", "read", "update", "delete"],
    "featured_meals": ["read"],
}

# Extra actions granted to coaches on top of member actions
COACH_ACTIONS = {
    "profiles": ["roster"],
    "workouts": ["create", "update", "delete"],
    "recipes": ["create", "update", "delete"],
    "messages": ["inbox"],
    "featured_meals": ["manage"],
    "coaches": ["update"],
}

ROLE_TYPES = {
    "admin": "System admin with full access to every module",
    "coach": "Trainer who authors content and manages a roster",
    "soldier": "Paid member",
    "user": "Free member (Recruit)",
}


def _names(actions_by_module):
    names = []
    for module_name, actions in actions_by_module.items():
        resource = MODULES[module_name]["resource"]
        names.extend(f"{resource}:{action}" for action in actions)
    return names


def get_permission_matrix():
    """
    Returns a dictionary with all permissions and the permissions held by each role
    Format: {
        "permissions": [
            {"name": "workouts:create", "resource": "workouts", "action": "create", "description": "..."},
            ...
        ],
        "roles": [
            {"name": "coach", "description": "...", "permissions": ["workouts:create", ...]},
            ...
        ]
    }
    """
    permissions = []
    for module_name, module_config in MODULES.items():
        resource = module_config["resource"]
        for action in module_config["actions"]:
            permissions.append({
                "name": f"{resource}:{action}",
                "resource": resource,
                "action": action,
                "description": f"{action.capitalize()} {module_config['description'].lower()}"
            })

    member = _names(MEMBER_ACTIONS)
    role_permissions = {
        "admin": [p["name"] for p in permissions],
        "coach": member + _names(COACH_ACTIONS),
        "soldier": member,
        "user": member,
    }

    roles = [
        {
            "name": role,
            "description": ROLE_TYPES[role],
            "permissions": sorted(set(role_permissions[role]))
        }
        for role in ROLE_TYPES
    ]
    return {
        "permissions": permissions,
        "roles": roles
    }


PERMISSION_MATRIX = get_permission_matrix()
ROLE_PERMISSIONS = {role["name"]: set(role["permissions"]) for role in PERMISSION_MATRIX["roles"]}


def get_role_permissions(role: str) -> list:
    """Permission names for a role; unknown roles fall back to the free member set."""
    return sorted(ROLE_PERMISSIONS.get(role, ROLE_PERMISSIONS["user"]))
