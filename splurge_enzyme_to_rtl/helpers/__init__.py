"""Shared helpers for the migration tool.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""
