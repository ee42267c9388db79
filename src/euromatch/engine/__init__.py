"""Donor aggregation and matching engine.

Deterministic, in-memory computations over already-resolved donor records:
head selection, per-policy income aggregation, match-key derivation and
the layered donor index with relaxation lookup.
"""
