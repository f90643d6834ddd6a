"""
Entry point for running searchkit as a module: python -m searchkit
"""

from searchkit.server import main

if __name__ == "__main__":
    main()
