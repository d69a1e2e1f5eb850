"""User endpoint bindings (users.roblox.com)."""
