"""
Exposes the version of geoframes
"""
__version__ = 'v0.1.0'

__all__ = ['__version__']
