"""Client-side wheel: selection, session identity and API access.

Services here are constructed explicitly and passed to the components
that need them; nothing is a module-level singleton.
"""
