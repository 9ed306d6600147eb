"""
Opt-out hand-off to the external removal automation.
"""

from .payloads import OptOutRequest, OptOutUserData, OptOutResult, build_opt_out_request, broker_key

__all__ = [
    "OptOutRequest",
    "OptOutUserData",
    "OptOutResult",
    "build_opt_out_request",
    "broker_key",
]
