"""Selective-subscription state engine.

Path derivation, partial merging, path-keyed dispatch, and the container
that composes them.  Nothing in this package knows about UI frameworks.
"""
