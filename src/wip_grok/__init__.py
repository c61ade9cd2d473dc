# SPDX-License-Identifier: MIT
"""wip-grok: command-line and MCP front ends for the xAI Grok API.

Sensor operations (web and X search) and actuator operations (image
generation/editing, asynchronous video generation) share one operations
layer under :mod:`wip_grok.tools`.
"""

__version__ = "1.0.0"
