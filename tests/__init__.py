"""
Test suite for the docxtree project.

This module contains the unit and integration tests for the docxtree package.
"""
