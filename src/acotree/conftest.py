# Copyright: 2005 MoinMoin:NirSoffer
# Copyright: 2007 MoinMoin:AlexanderSchremmer
# Copyright: 2008,2011 MoinMoin:ThomasWaldmann
# Copyright: 2023 MoinMoin project
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree Testing Framework
-------------------------

All test modules must be named test_modulename to be included in the
test suite.

Tests that require a certain configuration, like acl_delete_policy = "cascade",
must override the cfg fixture with a Config class derived from
acotree._tests.acotreeconfig.Config.

Every test using the app runs once for each storage backend.
"""

import os

import pytest

import acotree.log
import acotree
from acotree.app import create_app_ext, destroy_app
from acotree._tests import acotreeconfig

# Logging for tests to avoid useless output like timing information on stderr on test failures
acotree_dir = os.path.dirname(acotree.__file__)
config_file = os.path.join(acotree_dir, "_tests", "test_logging.conf")
acotree.log.load_config(config_file)

STORAGE_URIS = ["memory:", "sqla:"]


@pytest.fixture(params=STORAGE_URIS)
def storage_uri(request):
    return request.param


@pytest.fixture
def cfg():
    return acotreeconfig.Config


@pytest.fixture
def app_ctx(cfg, storage_uri):
    class Config(cfg):
        pass

    Config.storage_uri = storage_uri
    app = create_app_ext(acotree_config_class=Config, warn_default=False)
    ctx = app.test_request_context("/", base_url="http://localhost:8080/")
    ctx.push()

    yield app, ctx

    ctx.pop()
    destroy_app(app)


@pytest.fixture
def app(app_ctx):
    return app_ctx[0]


@pytest.fixture
def storage(app):
    return app.storage


@pytest.fixture
def resolver(app):
    return app.resolver
