"""
Guidebook - front-matter linting and cataloguing for Markdown guides.
"""

__version__ = "1.0.0"
