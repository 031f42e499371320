"""
Episode Parts API
Episodes and their ordered parts over HTTP
"""
__version__ = "1.0.0"
