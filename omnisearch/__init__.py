"""
omnisearch - client-side orchestration for multi-modal search.

Takes text, voice transcripts and images, turns them into canonical search
requests, forwards them to a remote search webhook and reconciles the
asynchronous answers into a single search session state.
"""

__version__ = "1.0.0"
