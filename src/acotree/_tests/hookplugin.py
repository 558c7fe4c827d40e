# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    AcoTree - hook plugin used by the tests

    Refuses grants on anything below "Admin".
"""


from acotree.constants.hooks import PERMISSION
from acotree.hooks import BeforeSaveHandler


class NoGrantsOnAdmin(BeforeSaveHandler):
    def before_save(self, entity, **kw):
        return kw.get("path", "").split("/")[0] != "Admin"


def register_hooks(registry):
    registry.register(PERMISSION, NoGrantsOnAdmin())
