"""
Opt-out hand-off payloads.

The browser automation that actually submits removal forms is a separate
subsystem; this module only packages what it needs from an Exposure.
"""

from typing import Optional

from pydantic import BaseModel, Field

from models.schema import Exposure


class OptOutUserData(BaseModel):
    """Contact details the opt-out form is filled with."""
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    address: Optional[str] = None


class OptOutRequest(BaseModel):
    """Payload for the opt-out automation, keyed by broker name."""
    broker: str = Field(..., description="Lower-case broker key, e.g. 'spokeo'")
    url: str = Field(..., description="Page the automation should open")
    user_data: OptOutUserData = Field(..., alias="userData")

    model_config = {"populate_by_name": True}


class OptOutResult(BaseModel):
    """What the automation reports back."""
    success: bool
    message: str


def broker_key(exposure: Exposure) -> str:
    """'Fast People Search' -> 'fastpeoplesearch'; unknown sites use the host's first label."""
    if exposure.site_name and exposure.site_name != exposure.site:
        return "".join(exposure.site_name.lower().split())
    return exposure.site.split(".")[0].lower()


def build_opt_out_request(
    exposure: Exposure,
    name: str,
    email: str,
    address: Optional[str] = None,
) -> OptOutRequest:
    """Package an exposure and the user's contact fields for the opt-out flow."""
    return OptOutRequest(
        broker=broker_key(exposure),
        url=exposure.removal_url or exposure.url,
        user_data=OptOutUserData(name=name, email=email, address=address),
    )
