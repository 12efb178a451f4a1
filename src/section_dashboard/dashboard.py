"""Dashboard controller.

Owns one document for the session, regenerates it from the configured
sections and renders it through a layout.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable, Optional

from .config import DashboardConfig, build_registry
from .document import Document
from .layout import Layout, get_layout
from .regenerator import RegenerationResult, Regenerator
from .registry import SectionRegistry, SectionSpec

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[2J\033[H"


class Dashboard:
    """Dashboard controller."""

    def __init__(
        self,
        config: Optional[DashboardConfig] = None,
        registry: Optional[SectionRegistry] = None,
    ) -> None:
        self.config = config or DashboardConfig()
        self.display = self.layout()
        self.registry = registry if registry is not None else build_registry(self.config)
        self.regenerator = Regenerator(self.registry)
        self.document = Document(header=self._resolve_header())
        self.last_result: Optional[RegenerationResult] = None

    def _resolve_header(self) -> Optional[str]:
        header = self.config.header
        if header is None or isinstance(header, str):
            return header
        spec = SectionSpec(tag=None, producer=header.build_producer(), name="header")
        return self.regenerator.generate(spec).content

    def refresh(self) -> RegenerationResult:
        """Run one regeneration pass over the document."""
        self.last_result = self.regenerator.regenerate(self.document)
        if not self.last_result.ok:
            logger.info("%d of %d sections failed", len(self.last_result.errors), len(self.registry))
        return self.last_result

    def layout(self) -> Layout:
        return get_layout(
            self.config.layout,
            columns=self.config.columns,
            width=self.config.column_width,
        )

    def render(self, layout: Optional[Layout] = None) -> str:
        """Render the document; regenerates first if it was never refreshed."""
        if self.last_result is None:
            self.refresh()
        return (layout or self.display).render(self.document)

    def watch(
        self,
        interval: Optional[int] = None,
        iterations: Optional[int] = None,
        echo: Callable[..., None] = print,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        """Continuously refresh and display the dashboard."""
        interval = interval if interval is not None else self.config.refresh_interval
        sleep = sleep or time.sleep
        count = 0
        try:
            while iterations is None or count < iterations:
                result = self.refresh()
                # Clear screen
                echo(CLEAR_SCREEN + self.render())
                stamp = datetime.fromisoformat(result.generated_at).strftime("%H:%M:%S")
                echo(f"\nUpdated {stamp}, refreshing in {interval}s... (Ctrl+C to exit)")
                count += 1
                if iterations is None or count < iterations:
                    sleep(interval)
        except KeyboardInterrupt:
            echo("\nExiting dashboard.")
