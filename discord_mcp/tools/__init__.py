"""Tool category modules for the Discord MCP server.

This package contains MCP tools organized by entity family:
- server_tools: Server (guild) information
- channel_tools: Text channel creation, deletion, lookup and listing
- category_tools: Category creation, deletion, lookup and contents
- message_tools: Channel messages and reactions
- user_tools: User lookup and private messages
- webhook_tools: Webhook management and webhook messages
- forum_tools: Forum channels, posts and tags
- thread_tools: Thread creation, state, membership and messages

Every ``register_*`` function takes the server and the shared
``DiscordContext``; tools borrow the context's client handle and scope
resolver instead of owning either.
"""

from .category_tools import register_category_tools
from .channel_tools import register_channel_tools
from .forum_tools import register_forum_tools
from .message_tools import register_message_tools
from .server_tools import register_server_tools
from .thread_tools import register_thread_tools
from .user_tools import register_user_tools
from .webhook_tools import register_webhook_tools

__all__ = [
    "register_server_tools",
    "register_channel_tools",
    "register_category_tools",
    "register_message_tools",
    "register_user_tools",
    "register_webhook_tools",
    "register_forum_tools",
    "register_thread_tools",
]

ALL_REGISTRARS = (
    register_server_tools,
    register_channel_tools,
    register_category_tools,
    register_message_tools,
    register_user_tools,
    register_webhook_tools,
    register_forum_tools,
    register_thread_tools,
)
