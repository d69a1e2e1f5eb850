"""
Group endpoint bindings (groups.roblox.com).

Each submodule maps one area of the groups API; import the submodule you need, e.g.
`from rbxweb.groups import relationships` then `relationships.enemies(jar, group_id)`.
"""
