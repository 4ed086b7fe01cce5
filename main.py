#!/usr/bin/env python3
"""
Main entry point for the HTTP header analysis tool.
This script serves as a wrapper around the headergrade package's main function.
"""

from headergrade.main import main

if __name__ == "__main__":
    main()
