"""CineSift.

A tool for collecting movies from the OMDb API, caching the fetched
details locally and narrowing them down with declarative criteria such
as era, rating ceiling, content rating, language and topic.
"""

__version__ = "0.1.0"

__author__ = "CineSift Team"
