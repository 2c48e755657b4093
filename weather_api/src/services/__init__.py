"""Business logic services.

This package contains the pieces the /weather endpoint composes: coordinate
validation, API key handling, the upstream client and the classifier.
"""
