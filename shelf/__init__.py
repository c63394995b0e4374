"""
shelf agent engine

Plans short agent tasks (hydrate, summarize, search) and runs them step by
step through registered skills.
"""

__version__ = "0.1.0"
