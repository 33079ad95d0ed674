"""SVG optimization pipelines for individual icons and the compiled sprite."""

from vjs_svg_sprite.optimizer.svg_optimizer import (
    SvgOptimizer,
    optimize_sprite,
    optimize_temp_icon,
)

__all__ = [
    "SvgOptimizer",
    "optimize_sprite",
    "optimize_temp_icon",
]
