"""World Builder - a backend for planning fictional worlds.

Users keep series and books, and inside them the battles, characters,
creatures, settings, transports and other resources of their world.
Every resource is reached through a series or book the caller owns.

Quick Start:
    uvicorn worldbuilder.api.main:app

    # or, programmatically
    from worldbuilder.api.main import create_app
    app = create_app()
"""

__version__ = "0.1.0"
