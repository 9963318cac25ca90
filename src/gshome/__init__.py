'''
gshome resolves the GeoServer home page context and assembles its service listing.

The project is distributed under a MIT License .
'''

__author__ = "gshome developers"
__copyright__ = "Copyright 2026 gshome developers"
__license__ = "MIT"

__version__ = "0.1.0"
