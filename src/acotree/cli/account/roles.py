# Copyright: 2006 MoinMoin:ThomasWaldmann
# Copyright: 2023 MoinMoin project
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree CLI - role memberships of user accounts
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


@cli.command("account-role-assign", help="Make user USER_ID a member of ROLE")
@click.argument("user_id", type=int)
@click.argument("role")
@report_errors
def AssignRole(user_id, role):
    app.storage.assign_role(user_id, role_arg(role))
    print(f"user {user_id} is a member of {role} now")


@cli.command("account-role-unassign", help="Remove user USER_ID from ROLE")
@click.argument("user_id", type=int)
@click.argument("role")
@report_errors
def UnassignRole(user_id, role):
    if app.storage.unassign_role(user_id, role_arg(role)):
        print(f"user {user_id} is no member of {role} any more")
    else:
        print(f"user {user_id} was no member of {role}")
