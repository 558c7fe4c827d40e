# Copyright: 2008-2010 MoinMoin:BastianBlank
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - hook registry.

Plugins register handler objects for an entity kind (see
acotree.constants.hooks) at startup. A handler implements one or more of the
capability classes below; the storage middleware calls all handlers of the
matching capability, ordered by priority.

A plugin module looks like this::

    from acotree.hooks import BeforeSaveHandler
    from acotree.constants.hooks import PERMISSION

    class NoGrantsOnAdmin(BeforeSaveHandler):
        def before_save(self, entity, **kw):
            return kw.get("path", "").split("/")[0] != "Admin"

    def register_hooks(registry):
        registry.register(PERMISSION, NoGrantsOnAdmin())
"""


import importlib
from abc import ABC, abstractmethod
from collections import namedtuple

from acotree import error
from acotree.constants.hooks import HOOK_KEYS
from acotree import log

logging = log.getLogger(__name__)


class BeforeSaveHandler(ABC):
    @abstractmethod
    def before_save(self, entity, **kw):
        """
        Called before entity gets stored. Return False to veto.
        """


class AfterSaveHandler(ABC):
    @abstractmethod
    def after_save(self, entity, **kw):
        """
        Called after entity was stored.
        """


class BeforeDeleteHandler(ABC):
    @abstractmethod
    def before_delete(self, entity, **kw):
        """
        Called before entity gets deleted. Return False to veto.
        """


class AfterDeleteHandler(ABC):
    @abstractmethod
    def after_delete(self, entity, **kw):
        """
        Called after entity was deleted.
        """


class HookRegistry:
    PRIORITY_REALLY_FIRST = -20
    PRIORITY_FIRST = -10
    PRIORITY_MIDDLE = 0
    PRIORITY_LAST = 10
    PRIORITY_REALLY_LAST = 20

    class Entry(namedtuple("Entry", "handler priority")):
        def __lt__(self, other):
            if isinstance(other, self.__class__):
                return self.priority < other.priority
            return NotImplemented

    def __init__(self):
        self._entries = {}  # key -> [Entry, ...]

    def __repr__(self):
        return f"<{self.__class__.__name__}: {self._entries!r}>"

    def register(self, key, handler, priority=PRIORITY_MIDDLE):
        """
        Register a handler for key.

        :param key: entity kind, one of acotree.constants.hooks.HOOK_KEYS
        :param handler: object implementing at least one capability class
        """
        if key not in HOOK_KEYS:
            raise ValueError(f"unknown hook key {key!r}, use one of {HOOK_KEYS!r}")
        capabilities = (BeforeSaveHandler, AfterSaveHandler, BeforeDeleteHandler, AfterDeleteHandler)
        if not isinstance(handler, capabilities):
            raise TypeError(f"{handler!r} does not implement any hook capability")
        entry = self.Entry(handler, priority)
        entries = self._entries.get(key, [])
        if entry in entries:
            return
        entries = entries[:]
        for i in range(len(entries)):
            if entry < entries[i]:
                entries.insert(i, entry)
                break
        else:
            entries.append(entry)
        self._entries[key] = entries

    def unregister(self, key, handler):
        """
        Unregister a handler.

        :param handler: handler to unregister.
        """
        old_entries = self._entries.get(key, [])
        entries = [i for i in old_entries if i.handler is not handler]
        if len(old_entries) == len(entries):
            raise ValueError(f"{handler!r} is not registered for {key}")
        self._entries[key] = entries

    def handlers(self, key, capability):
        """
        Return the handlers registered for key implementing capability, in priority order.
        """
        return [entry.handler for entry in self._entries.get(key, []) if isinstance(entry.handler, capability)]

    def before_save(self, key, entity, **kw):
        """
        Run the before_save handlers; return False as soon as one vetoes.
        """
        for handler in self.handlers(key, BeforeSaveHandler):
            if handler.before_save(entity, **kw) is False:
                logging.debug(f"{key} save vetoed by {handler!r}")
                return False
        return True

    def after_save(self, key, entity, **kw):
        for handler in self.handlers(key, AfterSaveHandler):
            handler.after_save(entity, **kw)

    def before_delete(self, key, entity, **kw):
        """
        Run the before_delete handlers; return False as soon as one vetoes.
        """
        for handler in self.handlers(key, BeforeDeleteHandler):
            if handler.before_delete(entity, **kw) is False:
                logging.debug(f"{key} delete vetoed by {handler!r}")
                return False
        return True

    def after_delete(self, key, entity, **kw):
        for handler in self.handlers(key, AfterDeleteHandler):
            handler.after_delete(entity, **kw)


def load_hook_plugins(registry, module_names):
    """
    Import each module and let it register its handlers.

    Each module must have a register_hooks(registry) function.
    """
    for module_name in module_names:
        try:
            module = importlib.import_module(module_name)
        except ImportError as err:
            raise error.ConfigurationError(f"Could not import hook plugin {module_name!r}: {err}")
        register_hooks = getattr(module, "register_hooks", None)
        if register_hooks is None:
            raise error.ConfigurationError(f"Hook plugin {module_name!r} has no register_hooks function.")
        register_hooks(registry)
        logging.debug(f"loaded hook plugin {module_name}")
