# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - backend tests

Note: the same tests run against every backend, so they must behave the same.
"""

import os
import tempfile

import pytest
from sqlalchemy.exc import IntegrityError as DBIntegrityError

from acotree.storage import backend_from_uri
from acotree.storage.backends.memory import MutableBackend as MemoryBackend
from acotree.storage.backends.sqla import MutableBackend as SQLABackend
from . import BackendTestBase


class TestMemoryBackend(BackendTestBase):
    def setup_method(self, method):
        self.be = MemoryBackend()
        self.be.create()
        self.be.open()


class TestSQLAMemoryBackend(BackendTestBase):
    def setup_method(self, method):
        self.be = SQLABackend()
        self.be.create()
        self.be.open()


class TestSQLAFileBackend(BackendTestBase):
    def setup_method(self, method):
        self.db_dir = tempfile.mkdtemp()
        self.be = SQLABackend(f"sqlite:///{self.db_dir}/acl.db")
        self.be.create()
        self.be.open()

    def teardown_method(self, method):
        super().teardown_method(method)
        os.remove(os.path.join(self.db_dir, "acl.db"))
        os.rmdir(self.db_dir)

    def test_persistent(self):
        users = self.be.add_aco(None, "Users")
        editor = self.be.add_role("editor")
        self.be.add_permission(editor.id, users.id)
        self.be.close()
        self.be.open()
        assert self.be.child_aco(None, "Users") == users
        assert self.be.has_permission(editor.id, [users.id])


class TestSQLAForeignKeys:
    def setup_method(self, method):
        self.be = SQLABackend()
        self.be.create()
        self.be.open()

    def teardown_method(self, method):
        self.be.close()
        self.be.destroy()

    def test_dangling_permission_rejected(self):
        editor = self.be.add_role("editor")
        with pytest.raises(DBIntegrityError):
            self.be.add_permission(editor.id, 4711)
        assert self.be.permissions_for_role(editor.id) == set()

    def test_dangling_membership_rejected(self):
        with pytest.raises(DBIntegrityError):
            self.be.add_membership(1, 4711)
        assert self.be.roles_of(1) == set()

    def test_dangling_parent_rejected(self):
        with pytest.raises(DBIntegrityError):
            self.be.add_aco(4711, "edit")
        assert list(self.be.iter_acos()) == []


def test_backend_from_uri():
    assert isinstance(backend_from_uri("memory:"), MemoryBackend)
    be = backend_from_uri("sqla:")
    assert isinstance(be, SQLABackend)
    assert be.in_memory
    be = backend_from_uri("sqla:sqlite:////tmp/acl.db")
    assert be.db_uri == "sqlite:////tmp/acl.db"
    assert not be.in_memory


def test_sqla_creates_db_directory():
    base = tempfile.mkdtemp()
    db_dir = os.path.join(base, "instance")
    SQLABackend(f"sqlite:///{db_dir}/acl.db")
    assert os.path.isdir(db_dir)
    os.rmdir(db_dir)
    os.rmdir(base)


def test_sqla_memory_survives_close():
    be = SQLABackend()
    be.create()
    be.open()
    be.add_role("editor")
    be.close()
    be.open()
    assert be.role_by_name("editor") is not None
    be.destroy()
