# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - policies for deleting ACO nodes and roles

Deleting an ACO node always deletes its descendants. The policy decides
what happens to permissions (and, for roles, memberships) still referencing
the deleted rows.
"""

# refuse the delete while dependent rows exist
DELETE_REJECT = "reject"

# delete dependent rows together with the node(s) / role
DELETE_CASCADE = "cascade"

DELETE_POLICIES = [DELETE_REJECT, DELETE_CASCADE]
