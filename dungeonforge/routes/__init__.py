"""HTTP blueprints for Dungeon Forge."""
