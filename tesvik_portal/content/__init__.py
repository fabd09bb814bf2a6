"""
Content administration helpers.

- menu: per-audience menu visibility rules
"""
