"""Octomate - declarative batch automation for GitHub repositories.

Runs YAML-defined jobs (issues, labels, teams, gists) against one or
more repositories through the GitHub REST API.
"""

__version__ = "0.1.0"
__author__ = "Octomate Team"
