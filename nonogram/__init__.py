"""
Nonogram - seeded puzzle generation and line-deduction solving.

Packages and modules:
    - nonogram.solver: grid model, generator, hints, line analyzers
    - nonogram.seeds: plain and img_ seed handling
    - nonogram.rasterizer: image -> boolean grid
    - nonogram.session: immutable game state and transitions
    - nonogram.solve_worker: step-by-step auto-solve thread
    - nonogram.settings: persisted user preferences
"""

__version__ = "0.1.0"
