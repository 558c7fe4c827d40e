# Copyright: 2000-2004 Juergen Hermann <jh@web.de>
# Copyright: 2005-2013 MoinMoin:ThomasWaldmann
# Copyright: 2008      MoinMoin:JohannesBerg
# Copyright: 2023      MoinMoin project
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - Configuration defaults class
"""


import inspect
import re

from acotree import error
from acotree.constants.policies import DELETE_REJECT, DELETE_POLICIES
from acotree.hooks import HookRegistry, load_hook_plugins

from acotree import log

logging = log.getLogger(__name__)


class CacheClass:
    """just a container for stuff we cache"""

    pass


def config_function(cfg, name):
    """
    Return the function configured as option name, to be called as f(cfg, ...).

    Functions defined in a config class would become bound methods of its
    instances, so the option is looked up without binding it. Functions set on
    the instance, partials and other callables are returned unchanged.
    """
    func = inspect.getattr_static(cfg, name)
    if isinstance(func, staticmethod):
        func = func.__func__
    return func


class ConfigFunctionality:
    """Configuration base class with config class behaviour.

    This class contains the functionality for the DefaultConfig class.
    """

    # attributes of this class that are not options
    cache = None

    def __init__(self):
        """Init Config instance"""
        self.cache = CacheClass()

        if self.config_check_enabled:
            self._config_check()

        if not isinstance(self.storage_uri, str) or ":" not in self.storage_uri:
            raise error.ConfigurationError(
                f"Invalid storage_uri {self.storage_uri!r}! Give something like 'memory:' or 'sqla:sqlite:///acl.db'."
            )

        if self.acl_delete_policy not in DELETE_POLICIES:
            raise error.ConfigurationError(
                "Invalid acl_delete_policy {!r}! Use one of: {}.".format(
                    self.acl_delete_policy, ", ".join(DELETE_POLICIES)
                )
            )

        if not callable(config_function(self, "user_loader")):
            raise error.ConfigurationError("user_loader must be a function f(cfg, storage).")

        # plugins register their hook handlers once, at startup
        self.cache.hooks = HookRegistry()
        load_hook_plugins(self.cache.hooks, self.hooks_plugins)

    def _config_check(self):
        """Check namespace and warn about unknown names

        Warn about names which are not used by DefaultConfig, except
        modules, classes, _private or __magic__ names.

        This check is disabled by default, when enabled, it will show an
        error message with unknown names.
        """
        unknown = [
            f'"{name}"'
            for name in dir(self)
            if not name.startswith("_")
            and name not in DefaultConfig.__dict__
            and name not in ConfigFunctionality.__dict__
            and not isinstance(getattr(self, name), (type(re), type(DefaultConfig)))
        ]
        if unknown:
            msg = """
Unknown configuration options: {}.

Please check your configuration for typos.
""".format(
                ", ".join(unknown)
            )
            raise error.ConfigurationError(msg)

    def __getitem__(self, item):
        """Make it possible to access a config object like a dict"""
        return getattr(self, item)


class DefaultConfig(ConfigFunctionality):
    """Configuration base class with default config values
    (added below)
    """

    # Do not add anything into this class. Functionality must
    # be added above. Settings must be added below to
    # the options dictionary.


def _default_user_loader(cfg, storage):
    """
    Return the User doing the current request, None means anonymous.

    Plug in a function reading the user id from your session / auth layer
    and returning acotree.user.User.from_storage(storage, user_id).
    """
    return None


class DefaultExpression:
    def __init__(self, exprstr):
        self.text = exprstr
        self.value = eval(exprstr)


#
# Options that are not prefixed automatically with their
# group name, see below (at the options dict) for more
# information on the layout of this structure.
#
options_no_group_name = {
    # ==========================================================================
    "various": (
        "Various",
        None,
        (
            ("config_check_enabled", False, "if True, check configuration for unknown settings."),
            (
                "user_loader",
                DefaultExpression("_default_user_loader"),
                "function f(cfg, storage) that returns the User of the current request (or None for anonymous).",
            ),
        ),
    ),
    # ==========================================================================
    "storage_setup": (
        "Storage setup",
        None,
        (
            ("create_storage", False, "if True, create the storage tables when the app starts."),
            ("destroy_storage", False, "if True, destroy the storage (and all its data!) when the app shuts down."),
        ),
    ),
}

#
# The 'options' dict carries default settings, grouped by topic.
# The option names get prefixed with their group name, e.g.
# "storage" / "uri" becomes cfg.storage_uri.
#
options = {
    "storage": (
        "Storage",
        "Where ACO nodes, roles, permissions and role memberships are kept.",
        (
            (
                "uri",
                "memory:",
                'backend uri, "memory:" (non-persistent, for tests) or "sqla:<sqlalchemy database url>".',
            ),
        ),
    ),
    "acl": (
        "Access Control",
        "Permissions are granted to roles on ACO nodes and inherited by all nodes below.",
        (
            (
                "delete_policy",
                DELETE_REJECT,
                'What to do when deleting ACO nodes or roles still referenced by permissions or memberships: '
                '"reject" the delete or "cascade" it to the referencing rows.',
            ),
        ),
    ),
    "hooks": (
        "Hooks",
        "Plugins extending the storage operations.",
        (("plugins", [], "list of module names, each having a register_hooks(registry) function."),),
    ),
}


def _add_options_to_defconfig(opts, addgroup=True):
    for groupname in opts:
        group_short, group_doc, group_opts = opts[groupname]
        for name, default, doc in group_opts:
            if addgroup:
                name = groupname + "_" + name
            if isinstance(default, DefaultExpression):
                default = default.value
            setattr(DefaultConfig, name, default)


_add_options_to_defconfig(options)
_add_options_to_defconfig(options_no_group_name, False)
