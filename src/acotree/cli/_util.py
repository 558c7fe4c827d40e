# Copyright: 2023 MoinMoin project
# Copyright: 2024 MoinMoin:UlrichB
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree cli._util common functions used in cli
"""

from functools import wraps

import click

from acotree.error import StorageError

from acotree import log

logging = log.getLogger(__name__)


def report_errors(f):
    """
    command decorator turning storage errors and invalid input into a
    "Error: ..." message and exit code 1
    """

    @wraps(f)
    def wrapped_f(*args, **kw):
        try:
            return f(*args, **kw)
        except (StorageError, ValueError) as err:
            logging.debug(f"{f.__name__} failed: {err}")
            raise click.ClickException(str(err))

    return wrapped_f


def role_arg(role):
    """role given on the command line: a number is a role id, everything else a role name"""
    return int(role) if role.isdigit() else role
