"""
Local Library Catalog

A server-rendered catalog built with FastAPI, SQLAlchemy and Jinja2.
"""

__version__ = "1.0.0"
