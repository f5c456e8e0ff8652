"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class CompletionGatewayError(Exception):
    """Base exception for the entire application."""


# ── Model capability errors ─────────────────────────────────────────────────


class CapabilityInvocationError(CompletionGatewayError):
    """Any failure surfaced by the external model capability.

    Network, authentication, quota and malformed-input rejections all land
    here as one undistinguished category.
    """
