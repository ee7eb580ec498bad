"""Shared testing utilities for the Discord MCP project.

- discord_fakes.py: spec'd fakes of discord.py objects and a fake client
"""
