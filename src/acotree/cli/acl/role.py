# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree CLI - manage roles
"""


import click
from flask import current_app as app
from flask.cli import FlaskGroup

from acotree.app import create_app
from acotree.cli._util import report_errors, role_arg
from acotree import log

logging = log.getLogger(__name__)


@click.group(cls=FlaskGroup, create_app=create_app)
def cli():
    pass


@cli.command("role-add", help="Create a role")
@click.argument("name")
@report_errors
def RoleAdd(name):
    role = app.storage.add_role(name)
    print(f"{role.name} (id {role.id})")


@cli.command("role-remove", help="Remove a role, given by name or id")
@click.argument("role")
@report_errors
def RoleRemove(role):
    role = app.storage.remove_role(role_arg(role))
    print(f"removed {role.name}")


@cli.command("role-list", help="List all roles")
def RoleList():
    for role in app.storage.iter_roles():
        print(f"{role.id} {role.name}")
