"""
Grok CLI - Three-layer architecture for the Grok API.

Layers:
- core: Raw types and HTTP client
- sdk: High-level GrokClient with typed operations
- cli: Interactive command loop
"""

from grok_cli.sdk import GrokClient

__version__ = "0.1.0"
__all__ = ["GrokClient"]
