"""
Minimal hello world HTTP listener.
"""
