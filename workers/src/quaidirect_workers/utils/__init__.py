"""Validation and deduplication utilities"""
