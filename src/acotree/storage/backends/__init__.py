# Copyright: 2011 MoinMoin:RonnyPfannschmidt
# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - backend base classes.

Backends only store and fetch rows. They do not know about paths, hooks or
delete policies, this is done by the integrity middleware on top of them.
"""

from abc import abstractmethod, ABCMeta


class BackendBase(metaclass=ABCMeta):
    """
    Read-only access to ACO nodes, roles, permissions and role memberships.
    """

    @classmethod
    @abstractmethod
    def from_uri(cls, uri):
        """
        Create an instance using the data given in the URI.
        """

    @abstractmethod
    def open(self):
        """
        Open the backend; allocate resources.
        """

    @abstractmethod
    def close(self):
        """
        Close the backend; free resources (except the stored data!).
        """

    @abstractmethod
    def get_aco(self, aco_id):
        """
        Return the AcoNode with id aco_id, raise KeyError if there is none.
        """

    @abstractmethod
    def child_aco(self, parent_id, alias):
        """
        Return the child of parent_id (None: a root node) named alias, or None.
        """

    @abstractmethod
    def children(self, aco_id):
        """
        Return a list of the direct children of aco_id (None: the root nodes), ordered by id.
        """

    @abstractmethod
    def iter_acos(self):
        """
        Iterate over all AcoNodes.
        """

    @abstractmethod
    def get_role(self, role_id):
        """
        Return the Role with id role_id, raise KeyError if there is none.
        """

    @abstractmethod
    def role_by_name(self, name):
        """
        Return the Role named name, or None.
        """

    @abstractmethod
    def iter_roles(self):
        """
        Iterate over all Roles.
        """

    @abstractmethod
    def has_permission(self, role_id, aco_ids):
        """
        Return True if role_id holds a permission on any of aco_ids.
        """

    @abstractmethod
    def permissions_for_role(self, role_id):
        """
        Return the set of aco ids role_id holds a permission on.
        """

    @abstractmethod
    def permissions_for_acos(self, aco_ids):
        """
        Return a list of Permissions referencing any of aco_ids.
        """

    @abstractmethod
    def roles_of(self, user_id):
        """
        Return the set of role ids user_id is a member of.
        """

    @abstractmethod
    def members_of(self, role_id):
        """
        Return the set of user ids being a member of role_id.
        """


class MutableBackendBase(BackendBase):
    """
    Same as Backend, but read/write.
    """

    @abstractmethod
    def create(self):
        """
        Create the backend.
        """

    @abstractmethod
    def destroy(self):
        """
        Destroy the backend; erase all data it contains.
        """

    @abstractmethod
    def add_aco(self, parent_id, alias):
        """
        Store a new ACO node below parent_id; return the AcoNode.
        """

    @abstractmethod
    def remove_acos(self, aco_ids, permissions=()):
        """
        Delete the ACO nodes aco_ids together with the given Permissions, in
        one transaction.

        The permissions referencing aco_ids must be exactly the given ones,
        otherwise nothing is deleted and IntegrityError is raised.
        """

    @abstractmethod
    def add_role(self, name):
        """
        Store a new role; return the Role.
        """

    @abstractmethod
    def remove_role(self, role_id, aco_ids=(), user_ids=()):
        """
        Delete the role role_id together with its permissions on aco_ids and
        the memberships of user_ids, in one transaction.

        The role's permissions and members must be exactly the given ones,
        otherwise nothing is deleted and IntegrityError is raised.
        """

    @abstractmethod
    def add_permission(self, role_id, aco_id):
        """
        Grant role_id access to aco_id; granting twice is a no-op.
        """

    @abstractmethod
    def remove_permission(self, role_id, aco_id):
        """
        Revoke a permission; return True if there was one.
        """

    @abstractmethod
    def add_membership(self, user_id, role_id):
        """
        Make user_id a member of role_id; adding twice is a no-op.
        """

    @abstractmethod
    def remove_membership(self, user_id, role_id):
        """
        Remove a membership; return True if there was one.
        """
