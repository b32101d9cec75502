"""Randomly request pull request reviewers from recent repository activity."""
