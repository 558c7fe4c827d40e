# Copyright: 2010 MoinMoin:ThomasWaldmann
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    AcoTree - logging signal handlers
"""


from .signals import ANY, aco_created, aco_removed, role_created, role_removed
from .signals import permission_granted, permission_revoked, role_assigned, role_unassigned

from .. import log

logging = log.getLogger(__name__)


@aco_created.connect_via(ANY)
def log_aco_created(storage, node, path):
    logging.info(f"aco {path} (id {node.id}) created")


@aco_removed.connect_via(ANY)
def log_aco_removed(storage, node, path):
    logging.info(f"aco {path} (id {node.id}) removed")


@role_created.connect_via(ANY)
def log_role_created(storage, role):
    logging.info(f"role {role.name} (id {role.id}) created")


@role_removed.connect_via(ANY)
def log_role_removed(storage, role):
    logging.info(f"role {role.name} (id {role.id}) removed")


@permission_granted.connect_via(ANY)
def log_permission_granted(storage, role, node, path):
    logging.info(f"role {role.name} granted access to {path}")


@permission_revoked.connect_via(ANY)
def log_permission_revoked(storage, role, node, path):
    logging.info(f"role {role.name} lost access to {path}")


@role_assigned.connect_via(ANY)
def log_role_assigned(storage, user_id, role):
    logging.info(f"user {user_id} assigned to role {role.name}")


@role_unassigned.connect_via(ANY)
def log_role_unassigned(storage, user_id, role):
    logging.info(f"user {user_id} removed from role {role.name}")
