"""Bundled data files for sitedeploy."""
