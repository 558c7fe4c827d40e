# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2023 MoinMoin project
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree CLI - create / destroy the storage
"""


import click
from flask import current_app as app
from flask.cli import FlaskGroup

from acotree.app import create_app
from acotree import log

logging = log.getLogger(__name__)


@click.group(cls=FlaskGroup, create_app=create_app)
def cli():
    pass


@cli.command("create-storage", help="Create empty storage tables")
def CreateStorage():
    app.storage.create()
    logging.info(f"storage {app.cfg.storage_uri} created")


@cli.command("destroy-storage", help="Destroy the storage and all ACO nodes, roles and permissions in it")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
def DestroyStorage(yes):
    if not yes:
        click.confirm(f"Really destroy all data in {app.cfg.storage_uri}?", abort=True)
    app.storage.destroy()
    logging.info(f"storage {app.cfg.storage_uri} destroyed")
