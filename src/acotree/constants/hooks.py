# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - hook registry keys

Handlers are registered per entity kind, see acotree.hooks.
"""

ACO = "Aco"
ROLE = "Role"
PERMISSION = "Permission"
MEMBERSHIP = "Membership"

HOOK_KEYS = [ACO, ROLE, PERMISSION, MEMBERSHIP]
