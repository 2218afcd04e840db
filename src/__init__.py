"""
Community Validation Engine

Routes AI-generated content to panels of community validators, collects
structured scores and feedback, decides consensus by score dispersion,
and drives the revise-and-resubmit loop until content is validated or
rejected.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
