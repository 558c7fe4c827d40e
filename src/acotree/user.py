# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - user projection

The user profile itself (login, password, email, ...) lives elsewhere. For
access checks we only need to know which roles a user has.
"""


from acotree.constants.misc import ANON


class User:
    """read-only view of a user and its role memberships"""

    def __init__(self, name=ANON, role_ids=(), user_id=None):
        """
        :param name: user name (only used for logging and display)
        :param role_ids: iterable of role ids the user is a member of
        :param user_id: id used to store role memberships, None for anonymous users
        """
        self.name = name
        self.user_id = user_id
        self.role_ids = frozenset(role_ids or ())

    @classmethod
    def from_storage(cls, storage, user_id, name=None):
        """
        Build the projection for user_id from the role memberships kept by storage.
        """
        if name is None:
            name = str(user_id)
        return cls(name, storage.roles_of(user_id), user_id=user_id)

    @property
    def valid(self):
        return self.user_id is not None

    def __repr__(self):
        return "<{}.{} at {:#x} name:{!r} roles:{!r}>".format(
            self.__class__.__module__, self.__class__.__name__, id(self), self.name, sorted(self.role_ids)
        )


def anonymous():
    """Return a user without any roles."""
    return User(ANON)


def role_ids_of(user):
    """
    Return the role ids of any user-like object as a frozenset.

    Objects without role_ids (or with None there) have no roles.
    """
    role_ids = getattr(user, "role_ids", None)
    if not role_ids:
        return frozenset()
    try:
        return frozenset(role_ids)
    except TypeError:
        return frozenset()
