#!/usr/bin/env python3
"""
Putt interpreter entry point.

Usage: python putt.py [program.putt] [--verbose] [--max-steps N]
"""

from putt.interpreter import main

if __name__ == '__main__':
    main()
