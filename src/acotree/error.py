# Copyright: 2004-2005 Nir Soffer <nirs@freeshell.org>
# Copyright: 2026 AcoTree project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
AcoTree errors / exception classes.
"""

import sys


class Error(Exception):
    """Base class for AcoTree errors.

    You can initialize this class with either str, bytes or any object
    supporting __str__. The message is always kept as str.
    """

    def __init__(self, message):
        """Initialize an error, decode if needed

        :param message: str, bytes or object that supports __str__.
        """
        if isinstance(message, bytes):
            message = message.decode()
        if not isinstance(message, str):
            message = str(message)
        self.message = message

    def __str__(self):
        """Return the error message as str."""
        return self.message

    def __getitem__(self, item):
        """Make it possible to access attributes like a dict"""
        return getattr(self, item)


class CompositeError(Error):
    """Base class for exceptions containing another exception.

    Do not use this class directly; use its more specific subclasses.

    Useful for hiding a low-level error inside a high-level user-facing error,
    while keeping the inner error information for debugging.
    """

    def __init__(self, message):
        """Save system exception info before this exception is raised."""
        Error.__init__(self, message)
        self.innerException = sys.exc_info()

    def exceptions(self):
        """Return a list of all inner exceptions"""
        all = [self.innerException]
        while True:
            lastException = all[-1][1]
            try:
                all.append(lastException.innerException)
            except AttributeError:
                break
        return all


class FatalError(CompositeError):
    """Base class for fatal errors we can't handle.

    Do not use this class directly; use its more specific subclasses.
    """


class ConfigurationError(FatalError):
    """Raised when a fatal misconfiguration is found."""


class InternalError(FatalError):
    """Raised when an internal fatal error is found."""


class StorageError(Error):
    """Base class for errors of the administrative storage API."""


class NoSuchAcoError(StorageError):
    """Raised when an ACO node (given by id or path) does not exist."""


class NoSuchRoleError(StorageError):
    """Raised when a role (given by id or name) does not exist."""


class DuplicateError(StorageError):
    """Raised for a sibling ACO alias or a role name that is already taken."""


class IntegrityError(StorageError):
    """Raised when a delete would leave permissions or memberships dangling."""


class VetoedError(StorageError):
    """Raised when a before_save / before_delete hook vetoed an operation."""
