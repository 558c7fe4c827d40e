# Copyright: 2011 MoinMoin:RonnyPfannschmidt
# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - storage subsystem
===========================

We use a layered approach like this::

 Integrity Middleware              resolves paths, walks the ACO tree, keeps
 |                                 references intact, runs hooks, sends signals
 v
 Backend (memory, sqla)            simple stuff: add, get, remove and iterate
                                   over ACO nodes, roles, permissions and
                                   role memberships
"""

BACKENDS_PACKAGE = "acotree.storage.backends"


def backend_from_uri(uri):
    """
    create a backend instance for uri, e.g. "memory:" or "sqla:sqlite:///acl.db"
    """
    backend_name_uri = uri.split(":", 1)
    if len(backend_name_uri) != 2:
        raise ValueError(f"malformed backend uri: {uri}")
    backend_name, backend_uri = backend_name_uri
    module = __import__(BACKENDS_PACKAGE + "." + backend_name, globals(), locals(), ["MutableBackend"])
    return module.MutableBackend.from_uri(backend_uri)


def create_storage(uri, delete_policy, hooks=None):
    """
    create an IntegrityMiddleware on top of a backend created from uri

    The backend is neither created nor opened here.
    """
    from acotree.storage.middleware.integrity import IntegrityMiddleware

    return IntegrityMiddleware(backend_from_uri(uri), delete_policy=delete_policy, hooks=hooks)
