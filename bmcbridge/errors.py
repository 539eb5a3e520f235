"""
Error taxonomy shared by the transport, the client and vendor adapters.

Transport failures are classified into a handful of typed errors so callers
never need to inspect `requests` exceptions directly.
"""

import builtins
from typing import Optional


class BmcBridgeError(Exception):
    """Base exception for all BMC operations"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class AuthenticationError(BmcBridgeError):
    """Credentials were rejected by the BMC"""


class ConnectionError(BmcBridgeError):
    """
    Host unreachable, connection refused or TLS handshake failure.

    Attributes:
        attempts: Number of attempts made before giving up (1 when not retried)
    """

    def __init__(self, message: str, attempts: int = 1):
        super().__init__(message)
        self.attempts = attempts


class TimeoutError(BmcBridgeError):
    """Request deadline exceeded"""

    def __init__(self, message: str, attempts: int = 1):
        super().__init__(message)
        self.attempts = attempts


class NotFoundError(BmcBridgeError):
    """Requested resource does not exist on the BMC"""


class UnsupportedVendorError(BmcBridgeError):
    """No adapter could be resolved for the detected or requested vendor"""


class FeatureNotSupportedError(BmcBridgeError, builtins.NotImplementedError):
    """
    The bound adapter does not implement an operation.

    Subclasses the builtin NotImplementedError so generic handlers still work,
    while letting callers tell "this vendor can't do X" apart from a typo.
    """

    def __init__(self, operation: str, vendor: Optional[str] = None):
        self.operation = operation
        self.vendor = vendor
        if vendor:
            message = f"Operation '{operation}' is not implemented for vendor '{vendor}'"
        else:
            message = f"Operation '{operation}' is not implemented by this adapter"
        super().__init__(message)


# Virtual media errors

class VirtualMediaError(BmcBridgeError):
    """Base class for virtual media failures"""


class VirtualMediaNotFoundError(VirtualMediaError):
    """No virtual media device matched the request"""


class VirtualMediaConnectionError(VirtualMediaError):
    """The BMC could not reach the image URL"""


class VirtualMediaLicenseError(VirtualMediaError):
    """Virtual media requires a BMC license that is not installed"""


class VirtualMediaBusyError(VirtualMediaError):
    """The virtual media device is already in use"""


# Task / job errors

class TaskError(BmcBridgeError):
    """Base class for BMC task and job failures"""


class TaskTimeoutError(TaskError):
    """A job did not finish within the allotted time"""


class TaskFailedError(TaskError):
    """A job finished in a failed state"""
