"""
CreatorShare API Layer

FastAPI application exposing the ledger over HTTP.
"""
