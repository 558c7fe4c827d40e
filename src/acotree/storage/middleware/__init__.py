# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - storage middleware
"""
