"""CLI command groups"""
