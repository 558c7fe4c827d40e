# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - backend tests
"""

import pytest

from acotree.error import IntegrityError
from acotree.storage.types import AcoNode, Role, Permission


class BackendTestBase:
    def setup_method(self, method):
        """
        self.be needs to be a created/opened backend
        """
        raise NotImplementedError

    def teardown_method(self, method):
        """
        close and destroy self.be
        """
        self.be.close()
        self.be.destroy()

    def test_empty(self):
        assert list(self.be.iter_acos()) == []
        assert list(self.be.iter_roles()) == []
        assert self.be.children(None) == []
        assert self.be.roles_of(1) == set()

    def test_get_raises(self):
        with pytest.raises(KeyError):
            self.be.get_aco(4711)
        with pytest.raises(KeyError):
            self.be.get_role(4711)

    def test_add_get_remove_aco(self):
        users = self.be.add_aco(None, "Users")
        edit = self.be.add_aco(users.id, "edit")
        assert users == AcoNode(users.id, None, "Users")
        assert edit == AcoNode(edit.id, users.id, "edit")
        assert users.id != edit.id
        assert self.be.get_aco(edit.id) == edit
        self.be.remove_acos([edit.id])
        with pytest.raises(KeyError):
            self.be.get_aco(edit.id)
        assert self.be.child_aco(users.id, "edit") is None

    def test_remove_acos_with_permissions(self):
        users = self.be.add_aco(None, "Users")
        edit = self.be.add_aco(users.id, "edit")
        blocks = self.be.add_aco(None, "Blocks")
        editor = self.be.add_role("editor")
        self.be.add_permission(editor.id, edit.id)
        self.be.add_permission(editor.id, blocks.id)
        self.be.remove_acos([edit.id, users.id], [Permission(editor.id, edit.id)])
        assert [n.id for n in self.be.iter_acos()] == [blocks.id]
        assert self.be.permissions_for_role(editor.id) == {blocks.id}

    def test_remove_acos_unexpected_permission(self):
        users = self.be.add_aco(None, "Users")
        edit = self.be.add_aco(users.id, "edit")
        editor = self.be.add_role("editor")
        self.be.add_permission(editor.id, edit.id)
        with pytest.raises(IntegrityError):
            self.be.remove_acos([edit.id, users.id])
        # nothing was removed
        assert self.be.get_aco(users.id) == users
        assert self.be.get_aco(edit.id) == edit
        assert self.be.permissions_for_role(editor.id) == {edit.id}

    def test_remove_acos_missing_permission(self):
        users = self.be.add_aco(None, "Users")
        editor = self.be.add_role("editor")
        with pytest.raises(IntegrityError):
            self.be.remove_acos([users.id], [Permission(editor.id, users.id)])
        assert self.be.get_aco(users.id) == users

    def test_remove_acos_unknown_id(self):
        users = self.be.add_aco(None, "Users")
        with pytest.raises(KeyError):
            self.be.remove_acos([4711, users.id])
        assert self.be.get_aco(users.id) == users

    def test_child_aco(self):
        users = self.be.add_aco(None, "Users")
        blocks = self.be.add_aco(None, "Blocks")
        users_edit = self.be.add_aco(users.id, "edit")
        blocks_edit = self.be.add_aco(blocks.id, "edit")
        assert self.be.child_aco(None, "Users") == users
        assert self.be.child_aco(users.id, "edit") == users_edit
        assert self.be.child_aco(blocks.id, "edit") == blocks_edit
        assert self.be.child_aco(None, "edit") is None
        assert self.be.child_aco(users.id, "Edit") is None

    def test_children(self):
        users = self.be.add_aco(None, "Users")
        edit = self.be.add_aco(users.id, "edit")
        add = self.be.add_aco(users.id, "add")
        blocks = self.be.add_aco(None, "Blocks")
        assert self.be.children(None) == [users, blocks]
        assert self.be.children(users.id) == [edit, add]
        assert self.be.children(edit.id) == []
        assert sorted(n.id for n in self.be.iter_acos()) == sorted([users.id, edit.id, add.id, blocks.id])

    def test_roles(self):
        editor = self.be.add_role("editor")
        viewer = self.be.add_role("viewer")
        assert editor == Role(editor.id, "editor")
        assert self.be.get_role(viewer.id) == viewer
        assert self.be.role_by_name("editor") == editor
        assert self.be.role_by_name("nobody") is None
        assert list(self.be.iter_roles()) == [editor, viewer]
        self.be.remove_role(editor.id)
        assert list(self.be.iter_roles()) == [viewer]

    def test_remove_role_with_dependents(self):
        users = self.be.add_aco(None, "Users")
        editor = self.be.add_role("editor")
        viewer = self.be.add_role("viewer")
        self.be.add_permission(editor.id, users.id)
        self.be.add_permission(viewer.id, users.id)
        self.be.add_membership(1, editor.id)
        self.be.add_membership(1, viewer.id)
        self.be.remove_role(editor.id, [users.id], [1])
        assert list(self.be.iter_roles()) == [viewer]
        assert self.be.roles_of(1) == {viewer.id}
        assert self.be.permissions_for_acos([users.id]) == [Permission(viewer.id, users.id)]

    def test_remove_role_unexpected_dependents(self):
        users = self.be.add_aco(None, "Users")
        editor = self.be.add_role("editor")
        self.be.add_permission(editor.id, users.id)
        self.be.add_membership(1, editor.id)
        with pytest.raises(IntegrityError):
            self.be.remove_role(editor.id, [users.id])
        with pytest.raises(IntegrityError):
            self.be.remove_role(editor.id, [], [1])
        # nothing was removed
        assert self.be.get_role(editor.id) == editor
        assert self.be.permissions_for_role(editor.id) == {users.id}
        assert self.be.members_of(editor.id) == {1}

    def test_permissions(self):
        users = self.be.add_aco(None, "Users")
        edit = self.be.add_aco(users.id, "edit")
        editor = self.be.add_role("editor")
        viewer = self.be.add_role("viewer")
        self.be.add_permission(editor.id, users.id)
        self.be.add_permission(editor.id, users.id)
        assert self.be.has_permission(editor.id, [edit.id, users.id])
        assert not self.be.has_permission(editor.id, [edit.id])
        assert not self.be.has_permission(viewer.id, [edit.id, users.id])
        assert not self.be.has_permission(editor.id, [])
        assert self.be.permissions_for_role(editor.id) == {users.id}
        assert self.be.permissions_for_role(viewer.id) == set()
        self.be.add_permission(viewer.id, edit.id)
        assert self.be.permissions_for_acos([users.id, edit.id]) == [
            Permission(editor.id, users.id),
            Permission(viewer.id, edit.id),
        ]
        assert self.be.permissions_for_acos([]) == []
        assert self.be.remove_permission(editor.id, users.id) is True
        assert self.be.remove_permission(editor.id, users.id) is False
        assert not self.be.has_permission(editor.id, [users.id])

    def test_has_permission_accepts_any_iterable(self):
        users = self.be.add_aco(None, "Users")
        editor = self.be.add_role("editor")
        self.be.add_permission(editor.id, users.id)
        assert self.be.has_permission(editor.id, {users.id})
        assert self.be.has_permission(editor.id, (aco_id for aco_id in [users.id]))

    def test_memberships(self):
        editor = self.be.add_role("editor")
        viewer = self.be.add_role("viewer")
        self.be.add_membership(1, editor.id)
        self.be.add_membership(1, editor.id)
        self.be.add_membership(1, viewer.id)
        self.be.add_membership(2, viewer.id)
        assert self.be.roles_of(1) == {editor.id, viewer.id}
        assert self.be.roles_of(3) == set()
        assert self.be.members_of(viewer.id) == {1, 2}
        assert self.be.remove_membership(1, viewer.id) is True
        assert self.be.remove_membership(1, viewer.id) is False
        assert self.be.roles_of(1) == {editor.id}
        assert self.be.members_of(viewer.id) == {2}
