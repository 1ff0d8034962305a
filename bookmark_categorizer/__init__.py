"""
Bookmark categorization engine.
Turns the free text of a saved post into one category id out of a
user-defined taxonomy.
"""

__version__ = '0.1.0'
