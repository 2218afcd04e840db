"""Test helpers for validation engine tests.

Helpers:
    validation_factories: Builders for requests, validations, validators
        and workflows with keyword overrides

Usage:
    from tests.helpers.validation_factories import make_request
"""
