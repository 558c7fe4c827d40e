# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree CLI - manage the ACO tree
"""


import click
from flask import current_app as app
from flask.cli import FlaskGroup

from acotree.app import create_app
from acotree.cli._util import report_errors
from acotree import log

logging = log.getLogger(__name__)


@click.group(cls=FlaskGroup, create_app=create_app)
def cli():
    pass


@cli.command("aco-add", help="Register an ACO path, creating all missing nodes")
@click.argument("path")
@report_errors
def AcoAdd(path):
    node = app.storage.ensure_path(path)
    print(f"{app.storage.path_of(node)} (id {node.id})")


@cli.command("aco-remove", help="Remove an ACO node and everything below it")
@click.argument("path")
@report_errors
def AcoRemove(path):
    removed = app.storage.remove_aco(path)
    print(f"removed {len(removed)} node(s)")


@cli.command("aco-tree", help="Show the ACO tree")
def AcoTree():
    for depth, node in app.storage.walk():
        print(f"{'  ' * depth}{node.alias} (id {node.id})")
