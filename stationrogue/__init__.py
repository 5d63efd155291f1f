"""ECS world, game components, map data and JSON templates for a space-station roguelike."""

__version__ = "0.1.0"

__all__ = ["component_registry", "components", "config", "ecs", "maps", "templates"]