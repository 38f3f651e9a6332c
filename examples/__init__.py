"""Example tag readers for edndata.

This package demonstrates library usage but is not part of the core API.
"""
