"""Infrastructure adapters.

Adapters implement the repository protocols defined in each domain's
``protocols.py``.
"""
