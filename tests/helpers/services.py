"""Service call shortcuts for BabyCare tests."""

from __future__ import annotations

from typing import Any

from homeassistant.core import HomeAssistant

from custom_components.babycare import const


async def call_service(
    hass: HomeAssistant,
    service: str,
    data: dict[str, Any] | None = None,
    *,
    return_response: bool = False,
) -> Any:
    """Call a BabyCare service and wait for state writes to settle."""
    response = await hass.services.async_call(
        const.DOMAIN,
        service,
        data or {},
        blocking=True,
        return_response=return_response,
    )
    await hass.async_block_till_done()
    return response
