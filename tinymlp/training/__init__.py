"""Training loops, presets and the quadratic cost."""
