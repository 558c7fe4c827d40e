# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - common helper functions for acotree.cli tests.
"""


def invoke(app, command, *args, **kw):
    """run command within app, return the click Result (exit_code, output)"""
    return app.test_cli_runner().invoke(command, list(args), **kw)
