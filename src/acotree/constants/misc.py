# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - miscellaneous constants
"""

# separates the aliases of an ACO path, e.g. "Users/edit"
PATH_SEPARATOR = "/"

# name of the user projection used if nobody is logged in
ANON = "anonymous"
