"""Rendering components for the flock viewer.

Submodules are imported directly (``rendering.ships``, ``rendering.text``)
so the numba geometry kernels load without an OpenGL context.
"""
