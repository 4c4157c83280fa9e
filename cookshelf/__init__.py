"""Recipe directory walking and indexing, recipe images, terminal styles and Markdown options."""

__version__ = "0.1.0"