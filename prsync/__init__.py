"""Prsync: normalize and reconcile pull request timelines from GitHub REST and GraphQL."""

__version__ = "0.1.0"
