# Copyright: 2000-2006 by Juergen Hermann <jh@web.de>
# Copyright: 2002-2011 MoinMoin:ThomasWaldmann
# Copyright: 2008 MoinMoin:FlorianKrupicka
# Copyright: 2023-2025 MoinMoin:UlrichB
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree - WSGI application setup and related code.

Use create_app(config) to create a Flask application carrying the ACO storage
(app.storage) and the access control resolver (app.resolver). Views of the
host application can then be protected with
acotree.security.require_permission.
"""

from __future__ import annotations

from os import path, PathLike
from typing import Any

from flask import Flask
from flask import current_app as app
from flask import g as flaskg

from acotree.config import AcoTreeConfigProtocol
from acotree.config.default import config_function
from acotree.security import AccessControlResolver
from acotree.storage import create_storage
from acotree.user import anonymous

from acotree import log

logging = log.getLogger(__name__)


def create_app(config: str | PathLike[str] | None = None) -> Flask:
    """
    Simple wrapper around create_app_ext().
    """
    return create_app_ext(flask_config_file=config)


def create_app_ext(
    flask_config_file: str | PathLike[str] | None = None,
    flask_config_dict: dict[str, Any] | None = None,
    acotree_config_class: type | None = None,
    warn_default: bool = True,
    **kwargs,
) -> Flask:
    """
    Factory for AcoTree WSGI apps.

    :param flask_config_file: A Flask config file name (may define an ACOTREECFG class).
                              If not given, a config pointed to by the ACOTREECFG env var
                              will be loaded (if possible), else acotreeconfig.py in
                              the current directory (if it exists).
    :param flask_config_dict: A dict used to update the Flask config (applied after
                              flask_config_file was loaded, if given).
    :param acotree_config_class: If given, this class is instantiated as app.cfg;
                                 otherwise, ACOTREECFG from the Flask config is used. If that
                                 is also not present, the built-in DefaultConfig will be used.
    :param warn_default: Emit a warning if AcoTree falls back to its built-in default
                         config (perhaps the user forgot to specify ACOTREECFG?).
    :param kwargs: Additional keyword args will be patched into the AcoTree configuration
                   class (before its instance is created).
    """
    logging.debug("running create_app_ext")
    app = Flask("acotree")

    if flask_config_file:
        app.config.from_pyfile(path.abspath(flask_config_file))
    else:
        if not app.config.from_envvar("ACOTREECFG", silent=True):
            flask_config_file = path.abspath("acotreeconfig.py")
            if path.exists(flask_config_file):
                app.config.from_pyfile(flask_config_file)
    if flask_config_dict:
        app.config.update(flask_config_dict)
    Config = acotree_config_class
    if not Config:
        Config = app.config.get("ACOTREECFG")
    if not Config:
        if warn_default:
            logging.warning("using builtin default configuration")
        from acotree.config.default import DefaultConfig as Config
    for key, value in kwargs.items():
        setattr(Config, key, value)
    app.cfg = Config()

    app.storage = init_storage(app.cfg)
    app.resolver = AccessControlResolver(app.storage)

    app.before_request(before_request)
    return app


def destroy_app(app: Flask) -> None:
    deinit_storage(app)
    app.cfg = None


def init_storage(cfg: AcoTreeConfigProtocol):
    """
    initialize the storage according to the configuration
    """
    storage = create_storage(cfg.storage_uri, cfg.acl_delete_policy, hooks=cfg.cache.hooks)
    if cfg.create_storage:
        storage.create()
    storage.open()
    logging.debug(f"storage {cfg.storage_uri} opened, delete policy {cfg.acl_delete_policy}")
    return storage


def deinit_storage(app):
    app.storage.close()
    if app.cfg.destroy_storage:
        app.storage.destroy()
    app.storage = None
    app.resolver = None


def setup_user():
    """
    Try to retrieve a valid user object from the configured user loader.
    """
    user = config_function(app.cfg, "user_loader")(app.cfg, app.storage)
    if user is None:
        user = anonymous()
    return user


def before_request():
    """
    Called before each request, makes flaskg.user available to require_permission.
    """
    flaskg.user = setup_user()
    logging.debug(f"user: {flaskg.user!r}")
