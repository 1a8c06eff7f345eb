# SPDX-License-Identifier: Apache-2.0
"""Exception types raised by eyepatch."""

from __future__ import annotations


class EyePatchError(Exception):
    """Base exception for eyepatch errors"""
    pass


class DetectorNotInitializedError(EyePatchError):
    """Inference was requested before the detector handle was created"""
    pass


class DetectorBackendError(EyePatchError):
    """The configured detector backend cannot be built"""
    pass


class ResetUnsupportedError(EyePatchError, NotImplementedError):
    """The face mesh detector exposes no reset primitive"""
    pass
