"""prdescribe: summarize labelled pull requests with a chat completion model."""

__version__ = "0.1.0"
