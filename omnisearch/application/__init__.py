"""Application layer: the search state store and the search orchestrator."""
