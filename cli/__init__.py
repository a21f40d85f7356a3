"""CLI package for spotifyfetch

Command-line entry point (cli.main) and terminal rendering of the stats view.
"""
