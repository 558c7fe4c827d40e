# Copyright: 2007 MoinMoin:KarolNowak
# Copyright: 2008 MoinMoin:ThomasWaldmann
# Copyright: 2008, 2010 MoinMoin:ReimarBauer
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    AcoTree - some common code for testing
"""


from acotree.user import User


def create_acos(storage, paths):
    """registers all paths, returns a dict path -> AcoNode"""
    return {path: storage.ensure_path(path) for path in paths}


def become_member(storage, user_id, *roles):
    """assigns user_id to all roles (creating missing ones), returns the User projection"""
    for name in roles:
        if storage.role_by_name(name) is None:
            storage.add_role(name)
        storage.assign_role(user_id, name)
    return User.from_storage(storage, user_id)
