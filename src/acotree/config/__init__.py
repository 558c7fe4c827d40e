# Copyright: 2011-2013 MoinMoin:ThomasWaldmann
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol


class AcoTreeConfigProtocol(Protocol):
    storage_uri: str
    acl_delete_policy: str
    hooks_plugins: list[str]
    create_storage: bool
    destroy_storage: bool
    user_loader: Callable[[Any, Any], Optional[Any]]
    config_check_enabled: bool
    cache: Any
