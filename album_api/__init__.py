"""
Album API: albums, photos and users across a relational store and a
user document store.
"""
__version__ = "1.0.0"
