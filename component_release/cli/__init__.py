"""Command line interface for component-release"""
