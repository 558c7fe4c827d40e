# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - memory backend

Keeps the ACO tree, roles, permissions and memberships in memory (RAM,
non-persistent!).

Note: likely this is mostly useful for unit tests.
"""

from itertools import count

from acotree.error import IntegrityError
from acotree.storage.types import AcoNode, Role, Permission

from . import MutableBackendBase


class _State:
    """all data of one memory backend"""

    def __init__(self):
        self.acos = {}  # aco_id -> AcoNode
        self.children = {}  # (parent_id, alias) -> aco_id
        self.roles = {}  # role_id -> Role
        self.permissions = set()  # {(role_id, aco_id), ...}
        self.memberships = set()  # {(user_id, role_id), ...}
        self.aco_ids = count(1)
        self.role_ids = count(1)


class MutableBackend(MutableBackendBase):
    """
    A simple dict-based in-memory backend. No persistence!
    """

    @classmethod
    def from_uri(cls, uri):
        return cls()

    def __init__(self):
        self._st = None
        self.__st = None

    def create(self):
        self.__st = _State()

    def destroy(self):
        self.__st = None

    def open(self):
        self._st = self.__st

    def close(self):
        self._st = None

    def get_aco(self, aco_id):
        return self._st.acos[aco_id]

    def child_aco(self, parent_id, alias):
        aco_id = self._st.children.get((parent_id, alias))
        if aco_id is not None:
            return self._st.acos[aco_id]

    def children(self, aco_id):
        return sorted((node for node in self._st.acos.values() if node.parent_id == aco_id), key=lambda n: n.id)

    def iter_acos(self):
        yield from list(self._st.acos.values())

    def add_aco(self, parent_id, alias):
        node = AcoNode(next(self._st.aco_ids), parent_id, alias)
        self._st.acos[node.id] = node
        self._st.children[(parent_id, alias)] = node.id
        return node

    def remove_acos(self, aco_ids, permissions=()):
        aco_ids = set(aco_ids)
        missing = aco_ids - self._st.acos.keys()
        if missing:
            raise KeyError(min(missing))
        expected = {(p.role_id, p.aco_id) for p in permissions}
        found = {(r_id, a_id) for r_id, a_id in self._st.permissions if a_id in aco_ids}
        if found != expected:
            raise IntegrityError(f"Permissions on ACO nodes {sorted(aco_ids)} changed, not removing them.")
        self._st.permissions -= found
        for aco_id in aco_ids:
            node = self._st.acos.pop(aco_id)
            del self._st.children[(node.parent_id, node.alias)]

    def get_role(self, role_id):
        return self._st.roles[role_id]

    def role_by_name(self, name):
        for role in self._st.roles.values():
            if role.name == name:
                return role

    def iter_roles(self):
        yield from list(self._st.roles.values())

    def add_role(self, name):
        role = Role(next(self._st.role_ids), name)
        self._st.roles[role.id] = role
        return role

    def remove_role(self, role_id, aco_ids=(), user_ids=()):
        if self.permissions_for_role(role_id) != set(aco_ids) or self.members_of(role_id) != set(user_ids):
            raise IntegrityError(f"Permissions or members of role {role_id} changed, not removing it.")
        self._st.permissions -= {(role_id, aco_id) for aco_id in aco_ids}
        self._st.memberships -= {(user_id, role_id) for user_id in user_ids}
        del self._st.roles[role_id]

    def has_permission(self, role_id, aco_ids):
        permissions = self._st.permissions
        return any((role_id, aco_id) in permissions for aco_id in aco_ids)

    def permissions_for_role(self, role_id):
        return {aco_id for r_id, aco_id in self._st.permissions if r_id == role_id}

    def permissions_for_acos(self, aco_ids):
        aco_ids = set(aco_ids)
        return sorted(Permission(r_id, a_id) for r_id, a_id in self._st.permissions if a_id in aco_ids)

    def add_permission(self, role_id, aco_id):
        self._st.permissions.add((role_id, aco_id))

    def remove_permission(self, role_id, aco_id):
        try:
            self._st.permissions.remove((role_id, aco_id))
        except KeyError:
            return False
        return True

    def roles_of(self, user_id):
        return {r_id for u_id, r_id in self._st.memberships if u_id == user_id}

    def members_of(self, role_id):
        return {u_id for u_id, r_id in self._st.memberships if r_id == role_id}

    def add_membership(self, user_id, role_id):
        self._st.memberships.add((user_id, role_id))

    def remove_membership(self, user_id, role_id):
        try:
            self._st.memberships.remove((user_id, role_id))
        except KeyError:
            return False
        return True
