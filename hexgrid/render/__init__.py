"""
Rendering hand-off for the hex grid generator.
"""

from .layers import polygon_layers, label_layers, map_view, render_payload

__all__ = ["polygon_layers", "label_layers", "map_view", "render_payload"]
