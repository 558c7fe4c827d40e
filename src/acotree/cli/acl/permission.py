# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree CLI - grant and revoke permissions
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


@cli.command("permission-grant", help="Grant ROLE access to PATH and everything below it")
@click.argument("role")
@click.argument("path")
@report_errors
def PermissionGrant(role, path):
    app.storage.grant(role_arg(role), path)
    print(f"granted {role} access to {path}")


@cli.command("permission-revoke", help="Revoke a permission granted by permission-grant")
@click.argument("role")
@click.argument("path")
@report_errors
def PermissionRevoke(role, path):
    if app.storage.revoke(role_arg(role), path):
        print(f"revoked access of {role} to {path}")
    else:
        print(f"{role} had no permission on {path}")


@cli.command("permission-list", help="List the paths ROLE was granted access to")
@click.argument("role")
@report_errors
def PermissionList(role):
    for path in app.storage.permissions_for_role(role_arg(role)):
        print(path)
