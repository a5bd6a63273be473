"""
forcelayout: force-directed layout for weighted character networks

Computes 2D positions for a graph of characters (nodes weighted by mention
count) and their interactions (links weighted by interaction count) so that
strongly connected characters cluster together while the whole network
stays centered and legible.

Core concepts:
- Links are springs with a natural rest length
- Every pair of nodes repels, heavier nodes more strongly
- A weak pull keeps the layout centered in the viewport
- A cooling term (alpha) scales all forces down until the layout settles
- Pinned nodes are held in place by the caller (drag and drop)

The engine lives in forcelayout.core; forcelayout.analysis and
forcelayout.viz only read published snapshots.
"""

__version__ = "0.1.0"
