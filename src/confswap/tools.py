"""Built-in descriptors for the AI coding tools confswap manages."""

from __future__ import annotations

from confswap.config import ToolDescriptor

TOOLS = {
    "claude": ToolDescriptor(
        name="claude",
        display_name="Claude Code",
        config_rel_paths=(".claude/settings.json",),
    ),
    "codex": ToolDescriptor(
        name="codex",
        display_name="Codex",
        config_rel_paths=(".codex/config.toml", ".codex/auth.json"),
    ),
}


def list_tools() -> list[ToolDescriptor]:
    """Built-in tools in CLI order, sorted by name."""
    return [TOOLS[name] for name in sorted(TOOLS)]
