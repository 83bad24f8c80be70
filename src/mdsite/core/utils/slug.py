"""Slug generation for document identifiers and heading ids"""

import re


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def github_slug(text: str) -> str:
    """Slug a heading the way GitHub does: lowercase, punctuation dropped, each space a hyphen."""
    text = text.lower()
    text = re.sub(r'[^\w\- ]', '', text)
    return text.replace(' ', '-')


class Slugger:
    """Stateful heading slugger; repeated slugs get -1, -2, ... suffixes."""

    def __init__(self):
        self.occurrences: dict[str, int] = {}

    def slug(self, text: str) -> str:
        result = original = github_slug(text)
        while result in self.occurrences:
            self.occurrences[original] += 1
            result = f"{original}-{self.occurrences[original]}"
        self.occurrences[result] = 0
        return result
