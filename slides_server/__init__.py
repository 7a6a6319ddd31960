"""slides-server package.

A local presentation authoring backend. The FastAPI application is built by
:func:`slides_server.core.registrar.register_app`; the command line entry point
lives in :mod:`slides_server.cli`.
"""

__version__ = '1.0.0'
