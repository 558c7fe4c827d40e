# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    AcoTree - acotree.config.default Tests
"""


import functools

import pytest

from acotree.config.default import DefaultConfig, config_function, options, options_no_group_name
from acotree.constants.hooks import PERMISSION
from acotree.constants.policies import DELETE_REJECT
from acotree.error import ConfigurationError
from acotree.hooks import BeforeSaveHandler


def make_config(**kw):
    return type("Config", (DefaultConfig,), kw)()


class TestDefaults:
    def testOptionsBecomeAttributes(self):
        for groupname, (short, doc, opts) in options.items():
            for name, default, _ in opts:
                assert hasattr(DefaultConfig, f"{groupname}_{name}")
        for groupname, (short, doc, opts) in options_no_group_name.items():
            for name, default, _ in opts:
                assert hasattr(DefaultConfig, name)

    def testDefaults(self):
        cfg = make_config()
        assert cfg.storage_uri == "memory:"
        assert cfg.acl_delete_policy == DELETE_REJECT
        assert cfg.hooks_plugins == []
        assert cfg.create_storage is False
        assert config_function(cfg, "user_loader")(cfg, None) is None
        assert cfg["storage_uri"] == "memory:"

    def testAppConfig(self, app):
        assert app.cfg.create_storage is True
        assert app.cfg.storage_uri in ("memory:", "sqla:")


class TestChecks:
    @pytest.mark.parametrize("uri", ["", "memory", None, 42])
    def testInvalidStorageUri(self, uri):
        with pytest.raises(ConfigurationError):
            make_config(storage_uri=uri)

    def testInvalidDeletePolicy(self):
        with pytest.raises(ConfigurationError):
            make_config(acl_delete_policy="ignore")

    def testUserLoaderNotCallable(self):
        with pytest.raises(ConfigurationError):
            make_config(user_loader="nobody")

    def testConfigCheck(self):
        make_config(config_check_enabled=True)
        with pytest.raises(ConfigurationError):
            make_config(config_check_enabled=True, storage_url="memory:")

    def testHookPlugins(self):
        cfg = make_config(hooks_plugins=["acotree._tests.hookplugin"])
        assert len(cfg.cache.hooks.handlers(PERMISSION, BeforeSaveHandler)) == 1
        with pytest.raises(ConfigurationError):
            make_config(hooks_plugins=["acotree._tests.no_such_plugin"])


class TestUserLoader:
    def testCustomLoader(self, app, storage):
        from acotree.app import setup_user
        from acotree.user import User

        storage.add_role("editor")
        storage.assign_role(1, "editor")
        app.cfg.user_loader = lambda cfg, storage: User.from_storage(storage, 1, name="alice")
        user = setup_user()
        assert user.name == "alice"
        assert user.role_ids == storage.roles_of(1)

    def testLoaderInConfigClass(self):
        def user_loader(cfg, storage):
            return cfg, storage

        cfg = make_config(user_loader=user_loader)
        assert config_function(cfg, "user_loader")(cfg, "storage") == (cfg, "storage")

    def testPartialAndCallableObject(self):
        def load(user_id, cfg, storage):
            return user_id

        class Loader:
            def __call__(self, cfg, storage):
                return cfg

        cfg = make_config(user_loader=functools.partial(load, 7))
        assert config_function(cfg, "user_loader")(cfg, None) == 7
        cfg = make_config(user_loader=Loader())
        assert config_function(cfg, "user_loader")(cfg, None) is cfg
        cfg = make_config(user_loader=staticmethod(load))
        assert config_function(cfg, "user_loader") is load

    def testDefaultIsAnonymous(self, app):
        from acotree.app import setup_user

        user = setup_user()
        assert not user.valid
        assert user.role_ids == frozenset()


coverage_modules = ["acotree.config.default"]
