#!/usr/bin/env python3
"""
Test suite for BamaAI Connect.

Unit tests need no database, Redis or network; every collaborator is mocked.

    # Run all tests
    uv run python -m pytest tests/ -v

    # Using unittest
    uv run python -m unittest discover tests -v
"""
