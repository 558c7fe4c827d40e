# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - integrity middleware

Sits on top of a backend and is the only thing that should modify it:

* ACO paths ("Users/edit") are resolved by walking the tree from its roots,
  following the stored parent links
* grants and memberships may only reference existing roles and ACO nodes
* deleting an ACO node deletes its whole subtree
* deleting ACO nodes or roles still referenced by permissions or memberships
  is either rejected or cascaded, depending on the delete policy
* hooks (see acotree.hooks) are run around every change and a signal is sent
  after it
"""

from acotree.constants.hooks import ACO, ROLE, PERMISSION, MEMBERSHIP
from acotree.constants.misc import PATH_SEPARATOR
from acotree.constants.policies import DELETE_REJECT, DELETE_CASCADE, DELETE_POLICIES
from acotree.error import ConfigurationError, NoSuchAcoError, NoSuchRoleError, DuplicateError
from acotree.error import IntegrityError, VetoedError
from acotree.hooks import HookRegistry
from acotree.signalling import aco_created, aco_removed, role_created, role_removed
from acotree.signalling import permission_granted, permission_revoked, role_assigned, role_unassigned
from acotree.storage.types import AcoNode, Role, Permission, Membership

from acotree import log

logging = log.getLogger(__name__)


def split_path(path):
    """
    Split an ACO path into its aliases.

    Empty segments (leading, trailing or doubled separators) are dropped.
    Return None if path is not a str or does not contain any alias.
    """
    if not isinstance(path, str):
        return None
    aliases = [alias for alias in path.split(PATH_SEPARATOR) if alias]
    return aliases or None


class IntegrityMiddleware:
    def __init__(self, backend, delete_policy=DELETE_REJECT, hooks=None):
        """
        :param backend: a MutableBackend instance
        :param delete_policy: DELETE_REJECT or DELETE_CASCADE
        :param hooks: a HookRegistry, an empty one is used if not given
        """
        if delete_policy not in DELETE_POLICIES:
            raise ConfigurationError(f"Invalid delete policy {delete_policy!r}, use one of {DELETE_POLICIES!r}.")
        self.backend = backend
        self.delete_policy = delete_policy
        self.hooks = hooks if hooks is not None else HookRegistry()

    def create(self):
        self.backend.create()

    def destroy(self):
        self.backend.destroy()

    def open(self):
        self.backend.open()

    def close(self):
        self.backend.close()

    # ACO tree, reading

    def node_for_path(self, path):
        """
        Return the AcoNode for path or None if there is no such node.
        """
        aliases = split_path(path)
        if aliases is None:
            return None
        node = None
        for alias in aliases:
            node = self.backend.child_aco(node.id if node else None, alias)
            if node is None:
                return None
        return node

    def ancestor_chain(self, node):
        """
        Return [node, parent, ..., root].
        """
        chain = [node]
        while node.parent_id is not None:
            node = self.backend.get_aco(node.parent_id)
            chain.append(node)
        return chain

    def path_of(self, node):
        return PATH_SEPARATOR.join(n.alias for n in reversed(self.ancestor_chain(node)))

    def descendants(self, node):
        """
        Return all nodes below node, depth first (parents before their children).
        """
        result = []
        stack = list(reversed(self.backend.children(node.id)))
        while stack:
            child = stack.pop()
            result.append(child)
            stack.extend(reversed(self.backend.children(child.id)))
        return result

    def walk(self):
        """
        Yield (depth, node) for the whole tree, depth first, roots have depth 0.
        """
        stack = [(0, root) for root in reversed(self.backend.children(None))]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, child) for child in reversed(self.backend.children(node.id)))

    def get_aco(self, aco):
        """
        Return the AcoNode given by an AcoNode, its id or its path.
        """
        if isinstance(aco, AcoNode):
            aco = aco.id
        if isinstance(aco, int) and not isinstance(aco, bool):
            try:
                return self.backend.get_aco(aco)
            except KeyError:
                raise NoSuchAcoError(f"No ACO node with id {aco}.")
        node = self.node_for_path(aco)
        if node is None:
            raise NoSuchAcoError(f"No ACO node for path {aco!r}.")
        return node

    # ACO tree, writing

    def add_aco(self, parent, alias):
        """
        Add a node named alias below parent (None: add a root node); return it.
        """
        if not isinstance(alias, str) or not alias or PATH_SEPARATOR in alias:
            raise ValueError(f"Invalid ACO alias {alias!r}.")
        parent = self.get_aco(parent) if parent is not None else None
        parent_id = parent.id if parent else None
        path = alias if parent is None else self.path_of(parent) + PATH_SEPARATOR + alias
        if self.backend.child_aco(parent_id, alias) is not None:
            raise DuplicateError(f"ACO node {path!r} exists already.")
        if not self.hooks.before_save(ACO, AcoNode(None, parent_id, alias), path=path):
            raise VetoedError(f"Creating ACO node {path!r} was vetoed.")
        node = self.backend.add_aco(parent_id, alias)
        self.hooks.after_save(ACO, node, path=path)
        aco_created.send(self, node=node, path=path)
        return node

    def ensure_path(self, path):
        """
        Make sure all nodes of path exist, creating missing ones; return the last node.
        """
        aliases = split_path(path)
        if aliases is None:
            raise ValueError(f"Invalid ACO path {path!r}.")
        node = None
        for alias in aliases:
            child = self.backend.child_aco(node.id if node else None, alias)
            if child is None:
                child = self.add_aco(node, alias)
            node = child
        return node

    def remove_aco(self, aco):
        """
        Remove an ACO node together with all its descendants.

        :returns: list of removed nodes, parents before their children
        """
        node = self.get_aco(aco)
        path = self.path_of(node)
        subtree = [node] + self.descendants(node)
        permissions = self.backend.permissions_for_acos([n.id for n in subtree])
        if permissions and self.delete_policy != DELETE_CASCADE:
            logging.warning(f"not removing aco {path}: {len(permissions)} permission(s) still reference it")
            raise IntegrityError(f"ACO node {path!r} (or a node below it) is still referenced by permissions.")
        if not self.hooks.before_delete(ACO, node, path=path, descendants=subtree[1:]):
            raise VetoedError(f"Removing ACO node {path!r} was vetoed.")
        nodes = {n.id: n for n in subtree}
        paths = {n.id: self.path_of(n) for n in subtree}
        revoked = [(self.backend.get_role(p.role_id), nodes[p.aco_id]) for p in permissions]
        for role, n in revoked:
            self._check_remove_permission(role, n, paths[n.id])
        # children first, so there is never a node without its parent
        self.backend.remove_acos([n.id for n in reversed(subtree)], permissions)
        for role, n in revoked:
            self._permission_removed(role, n, paths[n.id])
        for n in subtree:
            self.hooks.after_delete(ACO, n, path=paths[n.id])
            aco_removed.send(self, node=n, path=paths[n.id])
        return subtree

    # roles

    def get_role(self, role):
        """
        Return the Role given by a Role, its id or its name.
        """
        if isinstance(role, Role):
            role = role.id
        if isinstance(role, bool) or not isinstance(role, (int, str)):
            raise NoSuchRoleError(f"No role {role!r}.")
        if isinstance(role, int):
            try:
                return self.backend.get_role(role)
            except KeyError:
                raise NoSuchRoleError(f"No role with id {role}.")
        found = self.backend.role_by_name(role)
        if found is None:
            raise NoSuchRoleError(f"No role named {role!r}.")
        return found

    def role_by_name(self, name):
        """
        Return the Role called name or None.
        """
        return self.backend.role_by_name(name)

    def iter_roles(self):
        return self.backend.iter_roles()

    def add_role(self, name):
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Invalid role name {name!r}.")
        if self.backend.role_by_name(name) is not None:
            raise DuplicateError(f"Role {name!r} exists already.")
        if not self.hooks.before_save(ROLE, Role(None, name)):
            raise VetoedError(f"Creating role {name!r} was vetoed.")
        role = self.backend.add_role(name)
        self.hooks.after_save(ROLE, role)
        role_created.send(self, role=role)
        return role

    def remove_role(self, role):
        """
        Remove a role; its permissions and memberships are handled by the delete policy.
        """
        role = self.get_role(role)
        aco_ids = sorted(self.backend.permissions_for_role(role.id))
        user_ids = sorted(self.backend.members_of(role.id))
        if (aco_ids or user_ids) and self.delete_policy != DELETE_CASCADE:
            logging.warning(
                f"not removing role {role.name}: {len(aco_ids)} permission(s), {len(user_ids)} member(s) left"
            )
            raise IntegrityError(f"Role {role.name!r} is still referenced by permissions or memberships.")
        if not self.hooks.before_delete(ROLE, role):
            raise VetoedError(f"Removing role {role.name!r} was vetoed.")
        nodes = [self.backend.get_aco(aco_id) for aco_id in aco_ids]
        paths = {node.id: self.path_of(node) for node in nodes}
        for node in nodes:
            self._check_remove_permission(role, node, paths[node.id])
        for user_id in user_ids:
            self._check_remove_membership(user_id, role)
        self.backend.remove_role(role.id, aco_ids, user_ids)
        for node in nodes:
            self._permission_removed(role, node, paths[node.id])
        for user_id in user_ids:
            self._membership_removed(user_id, role)
        self.hooks.after_delete(ROLE, role)
        role_removed.send(self, role=role)
        return role

    # permissions

    def grant(self, role, aco):
        """
        Give role access to the ACO node aco and everything below it.
        """
        role = self.get_role(role)
        node = self.get_aco(aco)
        path = self.path_of(node)
        permission = Permission(role.id, node.id)
        if not self.hooks.before_save(PERMISSION, permission, role=role, node=node, path=path):
            raise VetoedError(f"Granting {role.name!r} access to {path!r} was vetoed.")
        self.backend.add_permission(role.id, node.id)
        self.hooks.after_save(PERMISSION, permission, role=role, node=node, path=path)
        permission_granted.send(self, role=role, node=node, path=path)
        return permission

    def revoke(self, role, aco):
        """
        Revoke a permission granted by grant(); return True if there was one.
        """
        role = self.get_role(role)
        node = self.get_aco(aco)
        path = self.path_of(node)
        self._check_remove_permission(role, node, path)
        if not self.backend.remove_permission(role.id, node.id):
            return False
        self._permission_removed(role, node, path)
        return True

    def _check_remove_permission(self, role, node, path):
        if not self.hooks.before_delete(PERMISSION, Permission(role.id, node.id), role=role, node=node, path=path):
            raise VetoedError(f"Revoking access of {role.name!r} to {path!r} was vetoed.")

    def _permission_removed(self, role, node, path):
        self.hooks.after_delete(PERMISSION, Permission(role.id, node.id), role=role, node=node, path=path)
        permission_revoked.send(self, role=role, node=node, path=path)

    def has_permission(self, role_id, aco_ids):
        return self.backend.has_permission(role_id, aco_ids)

    def permissions_for_role(self, role):
        """
        Return the paths role was granted access to, sorted.
        """
        role = self.get_role(role)
        aco_ids = self.backend.permissions_for_role(role.id)
        return sorted(self.path_of(self.backend.get_aco(aco_id)) for aco_id in aco_ids)

    # role memberships

    def assign_role(self, user_id, role):
        role = self.get_role(role)
        membership = Membership(user_id, role.id)
        if not self.hooks.before_save(MEMBERSHIP, membership, role=role):
            raise VetoedError(f"Assigning user {user_id} to role {role.name!r} was vetoed.")
        self.backend.add_membership(user_id, role.id)
        self.hooks.after_save(MEMBERSHIP, membership, role=role)
        role_assigned.send(self, user_id=user_id, role=role)
        return membership

    def unassign_role(self, user_id, role):
        role = self.get_role(role)
        self._check_remove_membership(user_id, role)
        if not self.backend.remove_membership(user_id, role.id):
            return False
        self._membership_removed(user_id, role)
        return True

    def _check_remove_membership(self, user_id, role):
        if not self.hooks.before_delete(MEMBERSHIP, Membership(user_id, role.id), role=role):
            raise VetoedError(f"Removing user {user_id} from role {role.name!r} was vetoed.")

    def _membership_removed(self, user_id, role):
        self.hooks.after_delete(MEMBERSHIP, Membership(user_id, role.id), role=role)
        role_unassigned.send(self, user_id=user_id, role=role)

    def roles_of(self, user_id):
        return self.backend.roles_of(user_id)
