"""Command line interface: python -m inventory_compliance.cli"""
