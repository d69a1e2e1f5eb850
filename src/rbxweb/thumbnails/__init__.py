"""Thumbnail endpoint bindings (thumbnails.roblox.com)."""
