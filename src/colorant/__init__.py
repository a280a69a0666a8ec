"""colorant -- Color-window target acquisition loop.

Samples a screen region each cycle, finds the centroid of the pixels
inside an HSV window, and turns its offset from the region center into
pointer moves, clicks, or flicks.
"""

__version__ = "0.1.0"
