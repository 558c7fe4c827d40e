# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - Access Control Resolver

Permissions are granted to roles on nodes of the ACO (Access Control Object)
tree. A node is addressed by its path, e.g. "Users/edit" is the node "edit"
below the root node "Users".

How a check is processed

    The path is resolved to its node and the chain of its ancestors up to
    the root. A permission on any node of that chain grants access, so a
    permission on "Users" grants access to "Users", "Users/edit",
    "Users/edit/avatar", ...

    A user may be member of several roles; access is granted as soon as one
    of them holds a permission along the chain.

    Everything else means "no access": an unknown or malformed path, a user
    without roles, no matching permission. Checking never raises for these,
    only errors of the storage itself are passed on.
"""


from functools import wraps

from flask import current_app as app
from flask import g as flaskg
from flask import abort

from acotree.user import role_ids_of

from acotree import log

logging = log.getLogger(__name__)


def require_permission(path):
    """
    view decorator to require access to the ACO node path

    if access is not granted, abort with 403
    """

    def wrap(f):
        @wraps(f)
        def wrapped_f(*args, **kw):
            if not app.resolver.check(flaskg.user, path):
                abort(403)
            return f(*args, **kw)

        return wrapped_f

    return wrap


class AccessControlResolver:
    """
    Decides whether a user may access some ACO path.

    The storage must provide:

    * node_for_path(path) -> AcoNode or None
    * ancestor_chain(node) -> [AcoNode, ...], the node itself included
    * has_permission(role_id, aco_ids) -> bool

    The resolver keeps no state besides the storage reference, so one instance
    can be shared by all threads using that storage.
    """

    def __init__(self, storage):
        self.storage = storage

    def check(self, user, path):
        """Checks if user has access to the ACO node path

        :param user: object with a role_ids attribute (see acotree.user.User)
        :param path: slash separated ACO path, e.g. "Users/edit"
        :rtype: bool
        :returns: True if one of the user's roles was granted access to path
                  or one of its ancestors, False otherwise
        """
        node = self.storage.node_for_path(path)
        if node is None:
            logging.debug(f"access to {path!r} denied: no such aco")
            return False

        role_ids = role_ids_of(user)
        if not role_ids:
            logging.debug(f"access to {path!r} denied: user has no roles")
            return False

        aco_ids = {aco.id for aco in self.storage.ancestor_chain(node)}
        for role_id in role_ids:
            if self.storage.has_permission(role_id, aco_ids):
                logging.debug(f"access to {path!r} granted via role {role_id}")
                return True

        logging.debug(f"access to {path!r} denied: no permission for roles {sorted(role_ids, key=str)!r}")
        return False

    def may(self, user):
        """
        Return a checking function for user, e.g. may = resolver.may(user); may("Users/edit")
        """
        return lambda path: self.check(user, path)
