# Copyright: 2000-2002 Juergen Hermann <jh@web.de>
# Copyright: 2006,2011 MoinMoin:ThomasWaldmann
# Copyright: 2023-2024 MoinMoin:UlrichB
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree CLI - Extension Script Package
"""

import click

from flask.cli import FlaskGroup

from acotree.app import create_app
from acotree.cli.maint import storage
from acotree.cli.acl import aco, role, permission, check
from acotree.cli.account import roles

from acotree import log

logging = log.getLogger(__name__)


def Help():
    """AcoTree initial help"""
    print(
        """\
Quick help / most important commands overview:

  acotree create-storage                   # Create empty storage tables

  acotree aco-add Users/edit               # Register an ACO path

  acotree role-add editor                  # Create a role

  acotree permission-grant editor Users    # Grant access to Users and below

  acotree account-role-assign 1 editor     # Make user 1 an editor

  acotree check 1 Users/edit               # May user 1 access Users/edit?

For more information please run:

  acotree --help

  acotree <subcommand> --help
"""
    )


@click.group(cls=FlaskGroup, create_app=create_app, invoke_without_command=True)
@click.pass_context
def cli(ctx):
    """AcoTree extensions to the Flask CLI"""
    logging.debug("invoked_subcommand: %s", ctx.invoked_subcommand)
    if ctx.invoked_subcommand is None:
        Help()


@cli.command("help", help="Quick help")
def _Help():
    Help()


cli.add_command(storage.CreateStorage)
cli.add_command(storage.DestroyStorage)

cli.add_command(aco.AcoAdd)
cli.add_command(aco.AcoRemove)
cli.add_command(aco.AcoTree)

cli.add_command(role.RoleAdd)
cli.add_command(role.RoleRemove)
cli.add_command(role.RoleList)

cli.add_command(permission.PermissionGrant)
cli.add_command(permission.PermissionRevoke)
cli.add_command(permission.PermissionList)

cli.add_command(roles.AssignRole)
cli.add_command(roles.UnassignRole)

cli.add_command(check.Check)


if __name__ == "__main__":
    cli()
