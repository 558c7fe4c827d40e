# Copyright: 2010 MoinMoin:ThomasWaldmann
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    AcoTree - signals

    We define all signals here to avoid typos/conflicts in the signal name.
    The sender is always the IntegrityMiddleware instance doing the change.
"""


from blinker import Namespace, ANY  # noqa

_signals = Namespace()

aco_created = _signals.signal("aco_created")
aco_removed = _signals.signal("aco_removed")
role_created = _signals.signal("role_created")
role_removed = _signals.signal("role_removed")
permission_granted = _signals.signal("permission_granted")
permission_revoked = _signals.signal("permission_revoked")
role_assigned = _signals.signal("role_assigned")
role_unassigned = _signals.signal("role_unassigned")
