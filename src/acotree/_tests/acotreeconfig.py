# Copyright: 2000-2004 by Juergen Hermann <jh@web.de>
# Copyright: 2011-2013 by MoinMoin:ThomasWaldmann
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - Test configuration.

Do not change any values without good reason.

We mostly want to have default values here, except for stuff that doesn't
work without setting them.
"""


from acotree.config.default import DefaultConfig


class Config(DefaultConfig):
    """
    Default configuration for unit tests.
    """

    storage_uri = "memory:"
    create_storage = True  # create storage at app start
    destroy_storage = True  # remove storage at app shutdown
