# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - acotree.cli Tests
"""

from acotree.cli import cli
from acotree.cli._util import role_arg
from acotree.cli.maint.storage import DestroyStorage
from acotree.cli.acl.aco import AcoAdd, AcoRemove, AcoTree
from acotree.cli.acl.role import RoleAdd, RoleRemove, RoleList
from acotree.cli.acl.permission import PermissionGrant, PermissionRevoke, PermissionList
from acotree.cli.acl.check import Check
from acotree.cli.account.roles import AssignRole, UnassignRole

from acotree._tests import create_acos, become_member
from acotree.cli._tests import invoke


def test_help(app):
    result = invoke(app, cli, "help")
    assert result.exit_code == 0
    assert "acotree check 1 Users/edit" in result.output


def test_commands_registered():
    names = set(cli.commands)
    for name in (
        "create-storage",
        "destroy-storage",
        "aco-add",
        "aco-remove",
        "aco-tree",
        "role-add",
        "role-remove",
        "role-list",
        "permission-grant",
        "permission-revoke",
        "permission-list",
        "account-role-assign",
        "account-role-unassign",
        "check",
    ):
        assert name in names


def test_role_arg():
    assert role_arg("42") == 42
    assert role_arg("editor") == "editor"
    assert role_arg("editor2") == "editor2"


class TestAco:
    def test_add_and_tree(self, app, storage):
        result = invoke(app, AcoAdd, "Users/edit")
        assert result.exit_code == 0
        edit = storage.node_for_path("Users/edit")
        assert result.output == f"Users/edit (id {edit.id})\n"
        invoke(app, AcoAdd, "Blocks")
        result = invoke(app, AcoTree)
        assert result.exit_code == 0
        assert [line.split(" (")[0] for line in result.output.splitlines()] == ["Users", "  edit", "Blocks"]

    def test_add_invalid(self, app):
        result = invoke(app, AcoAdd, "//")
        assert result.exit_code == 1
        assert "Invalid ACO path" in result.output

    def test_remove(self, app, storage):
        create_acos(storage, ["Users/edit", "Users/add"])
        result = invoke(app, AcoRemove, "Users")
        assert result.exit_code == 0
        assert result.output == "removed 3 node(s)\n"
        assert list(storage.walk()) == []

    def test_remove_missing(self, app):
        result = invoke(app, AcoRemove, "Users")
        assert result.exit_code == 1
        assert "No ACO node" in result.output

    def test_remove_referenced(self, app, storage):
        create_acos(storage, ["Users/edit"])
        storage.add_role("editor")
        storage.grant("editor", "Users/edit")
        result = invoke(app, AcoRemove, "Users")
        assert result.exit_code == 1
        assert "still referenced" in result.output
        assert storage.node_for_path("Users/edit") is not None


class TestRoles:
    def test_add_list_remove(self, app, storage):
        result = invoke(app, RoleAdd, "editor")
        assert result.exit_code == 0
        editor = storage.get_role("editor")
        assert result.output == f"editor (id {editor.id})\n"
        invoke(app, RoleAdd, "viewer")
        result = invoke(app, RoleList)
        assert [line.split()[1] for line in result.output.splitlines()] == ["editor", "viewer"]
        result = invoke(app, RoleRemove, str(editor.id))
        assert result.exit_code == 0
        assert result.output == "removed editor\n"
        result = invoke(app, RoleRemove, "viewer")
        assert result.exit_code == 0
        assert list(storage.iter_roles()) == []

    def test_add_duplicate(self, app, storage):
        storage.add_role("editor")
        result = invoke(app, RoleAdd, "editor")
        assert result.exit_code == 1
        assert "exists already" in result.output

    def test_assign_unassign(self, app, storage):
        editor = storage.add_role("editor")
        result = invoke(app, AssignRole, "1", "editor")
        assert result.exit_code == 0
        assert storage.roles_of(1) == {editor.id}
        result = invoke(app, UnassignRole, "1", "editor")
        assert result.exit_code == 0
        assert "no member of editor any more" in result.output
        result = invoke(app, UnassignRole, "1", "editor")
        assert result.exit_code == 0
        assert "was no member" in result.output
        assert storage.roles_of(1) == set()

    def test_assign_missing_role(self, app):
        result = invoke(app, AssignRole, "1", "nobody")
        assert result.exit_code == 1
        assert "No role named" in result.output


class TestPermissions:
    def test_grant_list_revoke(self, app, storage):
        create_acos(storage, ["Users/edit", "Blocks"])
        storage.add_role("editor")
        result = invoke(app, PermissionGrant, "editor", "Users")
        assert result.exit_code == 0
        invoke(app, PermissionGrant, "editor", "Blocks")
        result = invoke(app, PermissionList, "editor")
        assert result.output == "Blocks\nUsers\n"
        result = invoke(app, PermissionRevoke, "editor", "Blocks")
        assert result.output == "revoked access of editor to Blocks\n"
        result = invoke(app, PermissionRevoke, "editor", "Blocks")
        assert result.output == "editor had no permission on Blocks\n"
        assert storage.permissions_for_role("editor") == ["Users"]

    def test_grant_missing_aco(self, app, storage):
        storage.add_role("editor")
        result = invoke(app, PermissionGrant, "editor", "Users")
        assert result.exit_code == 1
        assert storage.permissions_for_role("editor") == []


class TestCheck:
    def test_check(self, app, storage):
        create_acos(storage, ["Users/edit", "Blocks"])
        become_member(storage, 1, "editor")
        storage.grant("editor", "Users")
        result = invoke(app, Check, "1", "Users/edit")
        assert result.exit_code == 0
        assert result.output == "granted\n"
        result = invoke(app, Check, "1", "Blocks")
        assert result.exit_code == 1
        assert result.output == "denied\n"
        result = invoke(app, Check, "2", "Users/edit")
        assert result.exit_code == 1
        result = invoke(app, Check, "1", "Nope")
        assert result.exit_code == 1


class TestStorage:
    def test_destroy_needs_confirmation(self, app, storage):
        create_acos(storage, ["Users"])
        result = invoke(app, DestroyStorage, input="n\n")
        assert result.exit_code == 1
        assert storage.node_for_path("Users") is not None

    def test_destroy(self, app):
        result = invoke(app, DestroyStorage, "--yes")
        assert result.exit_code == 0


coverage_modules = ["acotree.cli"]
