# transcript_grabber/acquisition/config.py
"""
Configuration for transcript acquisition.
Single responsibility: hold tunables shared by the runner and the strategies.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional


@dataclass
class AcquisitionConfig:
    """Tunables for one acquisition run."""
    host_root: str = "https://www.youtube.com"
    caption_format: str = "srv3"
    poll_interval: float = 0.5  # seconds between panel checks
    poll_attempts: int = 20  # 10s at the default interval
    panel_settle_delay: float = 1.0  # wait for segments once the panel exists
    menu_settle_delay: float = 0.5  # wait for overflow menu items
    http_timeout: Optional[float] = 30.0  # only applied to a runner-owned client
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, repr=False)

    @property
    def timedtext_endpoint(self) -> str:
        return f"{self.host_root}/api/timedtext"
