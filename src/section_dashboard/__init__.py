"""Section dashboard: a document of tagged, independently regenerable sections."""

__version__ = "0.1.0"

from .config import DashboardConfig, SectionConfig, build_registry, find_config
from .dashboard import Dashboard
from .document import Block, BufferHost, Document, DocumentHost
from .errors import ConfigurationError, DashboardError, HostIOError, ProducerError
from .layout import ColumnsLayout, Layout, SingleLayout, get_layout
from .producers import (
    build_producer,
    command_producer,
    file_listing_producer,
    http_producer,
    text_producer,
)
from .regenerator import RegenerationResult, Regenerator, SectionOutcome
from .registry import SectionRegistry, SectionSpec

__all__ = [
    "Block",
    "BufferHost",
    "ColumnsLayout",
    "ConfigurationError",
    "Dashboard",
    "DashboardConfig",
    "DashboardError",
    "Document",
    "DocumentHost",
    "HostIOError",
    "Layout",
    "ProducerError",
    "RegenerationResult",
    "Regenerator",
    "SectionConfig",
    "SectionOutcome",
    "SectionRegistry",
    "SectionSpec",
    "SingleLayout",
    "build_producer",
    "build_registry",
    "command_producer",
    "file_listing_producer",
    "find_config",
    "get_layout",
    "http_producer",
    "text_producer",
]
