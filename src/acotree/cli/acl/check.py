# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree CLI - check access of a user
"""


import sys

import click
from flask import current_app as app
from flask.cli import FlaskGroup

from acotree.app import create_app
from acotree.user import User
from acotree import log

logging = log.getLogger(__name__)


@click.group(cls=FlaskGroup, create_app=create_app)
def cli():
    pass


@cli.command("check", help="Check whether USER_ID may access PATH (exit code 0: granted, 1: denied)")
@click.argument("user_id", type=int)
@click.argument("path")
def Check(user_id, path):
    user = User.from_storage(app.storage, user_id)
    if app.resolver.check(user, path):
        print("granted")
        sys.exit(0)
    print("denied")
    sys.exit(1)
