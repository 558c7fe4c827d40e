# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - table column and field names
"""

ID = "id"
PARENT_ID = "parent_id"
ALIAS = "alias"
NAME = "name"

ROLE_ID = "role_id"
ACO_ID = "aco_id"
USER_ID = "user_id"

# table names
ACOS = "acos"
ROLES = "roles"
PERMISSIONS = "permissions"
USERS_ROLES = "users_roles"
