"""Tests for the Discord MCP server."""
