"""
Metaballs
=========

Bouncing circles drawn as fused "metaballs" with bezier outlines.

A handful of circles bounce around a fixed rectangle.  Every step the
simulation emits a vector drawing of the scene:

  - each circle as a closed four-segment cubic bezier
  - each close-enough pair as a pinched bezier bridge joining the two
  - one jgraph script per frame, ready for an external renderer

The drawing is produced as immutable command values, so the same frame
can be written to jgraph files or painted live in a Qt preview window.
"""

__version__ = "1.0.0"
__author__ = "Metaballs"
