# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AcoNode:
    """A node of the ACO tree; the root nodes have parent_id None."""

    id: int
    parent_id: Optional[int]
    alias: str


@dataclass(frozen=True)
class Role:
    id: int
    name: str


@dataclass(frozen=True, order=True)
class Permission:
    """role_id may access aco_id and everything below it"""

    role_id: int
    aco_id: int


@dataclass(frozen=True)
class Membership:
    user_id: int
    role_id: int
