# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - sqlalchemy backend

Stores the ACO tree, roles, permissions and memberships into any database
supported by sqlalchemy.
"""

import os

from sqlalchemy import create_engine, select, exists, MetaData, Table, Column, Integer, String, ForeignKey, Index
from sqlalchemy import UniqueConstraint, event
from sqlalchemy.exc import IntegrityError as DBIntegrityError
from sqlalchemy.pool import StaticPool

from acotree.constants.keys import ID, PARENT_ID, ALIAS, NAME, ROLE_ID, ACO_ID, USER_ID
from acotree.constants.keys import ACOS, ROLES, PERMISSIONS, USERS_ROLES
from acotree.error import IntegrityError
from acotree.storage.types import AcoNode, Role, Permission

from . import MutableBackendBase

ALIAS_LEN = 255
NAME_LEN = 128

MEMORY_URI = "sqlite:///:memory:"


def define_tables(metadata):
    """add the acotree tables to metadata; return them as a tuple"""
    acos = Table(
        ACOS,
        metadata,
        Column(ID, Integer, primary_key=True),
        Column(PARENT_ID, Integer, ForeignKey(f"{ACOS}.{ID}"), nullable=True),
        Column(ALIAS, String(ALIAS_LEN), nullable=False),
        UniqueConstraint(PARENT_ID, ALIAS),
        Index(f"ix_{ACOS}_{PARENT_ID}", PARENT_ID),
    )
    roles = Table(
        ROLES,
        metadata,
        Column(ID, Integer, primary_key=True),
        Column(NAME, String(NAME_LEN), nullable=False, unique=True),
    )
    permissions = Table(
        PERMISSIONS,
        metadata,
        Column(ROLE_ID, Integer, ForeignKey(f"{ROLES}.{ID}"), primary_key=True),
        Column(ACO_ID, Integer, ForeignKey(f"{ACOS}.{ID}"), primary_key=True),
        Index(f"ix_{PERMISSIONS}_{ACO_ID}", ACO_ID),
    )
    users_roles = Table(
        USERS_ROLES,
        metadata,
        Column(USER_ID, Integer, primary_key=True),
        Column(ROLE_ID, Integer, ForeignKey(f"{ROLES}.{ID}"), primary_key=True),
    )
    return acos, roles, permissions, users_roles


def _enable_foreign_keys(dbapi_connection, connection_record):
    # sqlite only enforces foreign keys if switched on for each connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def _aco(row):
    return AcoNode(row[0], row[1], row[2])


class MutableBackend(MutableBackendBase):
    """
    sqlalchemy backend, one table per kind of row.
    """

    @classmethod
    def from_uri(cls, uri):
        """
        Create a new cls instance using the uri

        :param cls: Class to create
        :param uri: The database uri that we pass on to SQLAlchemy, an empty
                    uri means a sqlite database in memory.
        """
        return cls(uri or None)

    def __init__(self, db_uri=None, verbose=False):
        """
        :param db_uri: The database uri that we pass on to SQLAlchemy.
                       May contain user/password/host/port/etc.
        :param verbose: Verbosity setting. If set to True this will print all SQL queries
                        to the console.
        """
        self.db_uri = db_uri
        self.verbose = verbose
        self.engine = None
        self.metadata = MetaData()
        self.acos, self.roles, self.permissions, self.users_roles = define_tables(self.metadata)
        if db_uri and db_uri.startswith("sqlite:///") and db_uri != MEMORY_URI:
            db_path = os.path.dirname(self.db_uri.split("sqlite:///")[1])
            if db_path and not os.path.exists(db_path):
                os.makedirs(db_path)

    @property
    def in_memory(self):
        return self.db_uri is None or self.db_uri == MEMORY_URI

    def open(self):
        if self.engine is not None:
            return
        if self.in_memory:
            # These are settings that apply only for development / testing only. The additional args are necessary
            # due to some limitations of the in-memory sqlite database.
            self.engine = create_engine(MEMORY_URI, poolclass=StaticPool, connect_args={"check_same_thread": False})
        else:
            self.engine = create_engine(self.db_uri, echo=self.verbose, echo_pool=self.verbose)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_foreign_keys)

    def close(self):
        # an in-memory database only lives as long as its engine
        if self.engine is not None and not self.in_memory:
            self.engine.dispose()
            self.engine = None

    def create(self):
        was_open = self.engine is not None
        self.open()
        with self.engine.connect() as conn:
            with conn.begin():
                self.metadata.create_all(conn)
        if not was_open:
            self.close()

    def destroy(self):
        was_open = self.engine is not None
        self.open()
        with self.engine.connect() as conn:
            with conn.begin():
                self.metadata.drop_all(conn)
        if not was_open:
            self.engine.dispose()
            self.engine = None

    def get_aco(self, aco_id):
        acos = self.acos
        with self.engine.connect() as conn:
            row = conn.execute(select(acos.c.id, acos.c.parent_id, acos.c.alias).where(acos.c.id == aco_id)).fetchone()
        if row is None:
            raise KeyError(aco_id)
        return _aco(row)

    def child_aco(self, parent_id, alias):
        acos = self.acos
        q = select(acos.c.id, acos.c.parent_id, acos.c.alias).where(acos.c.alias == alias)
        q = q.where(acos.c.parent_id.is_(None) if parent_id is None else acos.c.parent_id == parent_id)
        with self.engine.connect() as conn:
            row = conn.execute(q).fetchone()
        if row is not None:
            return _aco(row)

    def children(self, aco_id):
        acos = self.acos
        q = select(acos.c.id, acos.c.parent_id, acos.c.alias).order_by(acos.c.id)
        q = q.where(acos.c.parent_id.is_(None) if aco_id is None else acos.c.parent_id == aco_id)
        with self.engine.connect() as conn:
            return [_aco(row) for row in conn.execute(q)]

    def iter_acos(self):
        acos = self.acos
        with self.engine.connect() as conn:
            rows = conn.execute(select(acos.c.id, acos.c.parent_id, acos.c.alias).order_by(acos.c.id)).fetchall()
        for row in rows:
            yield _aco(row)

    def add_aco(self, parent_id, alias):
        with self.engine.connect() as conn:
            with conn.begin():
                result = conn.execute(self.acos.insert().values(parent_id=parent_id, alias=alias))
                aco_id = result.inserted_primary_key[0]
        return AcoNode(aco_id, parent_id, alias)

    def remove_acos(self, aco_ids, permissions=()):
        aco_ids = list(aco_ids)
        expected = {(perm.role_id, perm.aco_id) for perm in permissions}
        p, acos = self.permissions, self.acos
        try:
            with self.engine.connect() as conn:
                with conn.begin():
                    q = select(p.c.role_id, p.c.aco_id).where(p.c.aco_id.in_(aco_ids))
                    found = {(row[0], row[1]) for row in conn.execute(q)}
                    if found != expected:
                        raise IntegrityError(f"Permissions on ACO nodes {sorted(aco_ids)} changed, not removing them.")
                    for role_id, aco_id in found:
                        conn.execute(p.delete().where(p.c.role_id == role_id, p.c.aco_id == aco_id))
                    # children first, the database may check the parent link after each row
                    for aco_id in aco_ids:
                        if not conn.execute(acos.delete().where(acos.c.id == aco_id)).rowcount:
                            raise KeyError(aco_id)
        except DBIntegrityError as err:
            raise IntegrityError(f"Removing ACO nodes {sorted(aco_ids)} failed: {err.orig}")

    def get_role(self, role_id):
        roles = self.roles
        with self.engine.connect() as conn:
            row = conn.execute(select(roles.c.id, roles.c.name).where(roles.c.id == role_id)).fetchone()
        if row is None:
            raise KeyError(role_id)
        return Role(row[0], row[1])

    def role_by_name(self, name):
        roles = self.roles
        with self.engine.connect() as conn:
            row = conn.execute(select(roles.c.id, roles.c.name).where(roles.c.name == name)).fetchone()
        if row is not None:
            return Role(row[0], row[1])

    def iter_roles(self):
        roles = self.roles
        with self.engine.connect() as conn:
            rows = conn.execute(select(roles.c.id, roles.c.name).order_by(roles.c.id)).fetchall()
        for row in rows:
            yield Role(row[0], row[1])

    def add_role(self, name):
        with self.engine.connect() as conn:
            with conn.begin():
                result = conn.execute(self.roles.insert().values(name=name))
                role_id = result.inserted_primary_key[0]
        return Role(role_id, name)

    def remove_role(self, role_id, aco_ids=(), user_ids=()):
        p, ur = self.permissions, self.users_roles
        try:
            with self.engine.connect() as conn:
                with conn.begin():
                    found_acos = {row[0] for row in conn.execute(select(p.c.aco_id).where(p.c.role_id == role_id))}
                    found_users = {row[0] for row in conn.execute(select(ur.c.user_id).where(ur.c.role_id == role_id))}
                    if found_acos != set(aco_ids) or found_users != set(user_ids):
                        raise IntegrityError(f"Permissions or members of role {role_id} changed, not removing it.")
                    for aco_id in found_acos:
                        conn.execute(p.delete().where(p.c.role_id == role_id, p.c.aco_id == aco_id))
                    for user_id in found_users:
                        conn.execute(ur.delete().where(ur.c.user_id == user_id, ur.c.role_id == role_id))
                    conn.execute(self.roles.delete().where(self.roles.c.id == role_id))
        except DBIntegrityError as err:
            raise IntegrityError(f"Removing role {role_id} failed: {err.orig}")

    def has_permission(self, role_id, aco_ids):
        aco_ids = list(aco_ids)
        if not aco_ids:
            return False
        p = self.permissions
        q = select(exists().where(p.c.role_id == role_id, p.c.aco_id.in_(aco_ids)))
        with self.engine.connect() as conn:
            return bool(conn.execute(q).scalar())

    def permissions_for_role(self, role_id):
        p = self.permissions
        with self.engine.connect() as conn:
            return {row[0] for row in conn.execute(select(p.c.aco_id).where(p.c.role_id == role_id))}

    def permissions_for_acos(self, aco_ids):
        aco_ids = list(aco_ids)
        if not aco_ids:
            return []
        p = self.permissions
        q = select(p.c.role_id, p.c.aco_id).where(p.c.aco_id.in_(aco_ids)).order_by(p.c.role_id, p.c.aco_id)
        with self.engine.connect() as conn:
            return [Permission(row[0], row[1]) for row in conn.execute(q)]

    def add_permission(self, role_id, aco_id):
        with self.engine.connect() as conn:
            with conn.begin():
                p = self.permissions
                granted = conn.execute(select(exists().where(p.c.role_id == role_id, p.c.aco_id == aco_id))).scalar()
                if not granted:
                    conn.execute(p.insert().values(role_id=role_id, aco_id=aco_id))

    def remove_permission(self, role_id, aco_id):
        p = self.permissions
        with self.engine.connect() as conn:
            with conn.begin():
                result = conn.execute(p.delete().where(p.c.role_id == role_id, p.c.aco_id == aco_id))
        return result.rowcount > 0

    def roles_of(self, user_id):
        ur = self.users_roles
        with self.engine.connect() as conn:
            return {row[0] for row in conn.execute(select(ur.c.role_id).where(ur.c.user_id == user_id))}

    def members_of(self, role_id):
        ur = self.users_roles
        with self.engine.connect() as conn:
            return {row[0] for row in conn.execute(select(ur.c.user_id).where(ur.c.role_id == role_id))}

    def add_membership(self, user_id, role_id):
        with self.engine.connect() as conn:
            with conn.begin():
                ur = self.users_roles
                member = conn.execute(select(exists().where(ur.c.user_id == user_id, ur.c.role_id == role_id))).scalar()
                if not member:
                    conn.execute(ur.insert().values(user_id=user_id, role_id=role_id))

    def remove_membership(self, user_id, role_id):
        ur = self.users_roles
        with self.engine.connect() as conn:
            with conn.begin():
                result = conn.execute(ur.delete().where(ur.c.user_id == user_id, ur.c.role_id == role_id))
        return result.rowcount > 0
