# SPDX-License-Identifier: MIT
"""xAI Grok operations shared by the CLI and the MCP server.

This package contains the operations layer organized by category:
- search: Web and X search via the Responses endpoint (sensor operations)
- image: Image generation and editing (actuator operations)
- video: Asynchronous video generation, status polling, and waiting
"""
