"""Composition root for the validation engine.

Wires ports to their infrastructure implementations so the API and
application layers depend only on protocols.
"""
