"""
searchkit - Google search and webpage extraction tools
"""

__version__ = "0.1.0"
__server_name__ = "google-search"
